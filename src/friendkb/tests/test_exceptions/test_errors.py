from friendkb.exceptions import (
    ErrorKind,
    RepositoryError,
    NotFoundError,
    DuplicateError,
    ForeignKeyViolationError,
    DatabaseError,
    SerializationError,
)


def test_each_error_class_has_its_kind():
    assert NotFoundError().error_code is ErrorKind.NOT_FOUND
    assert DuplicateError("x").error_code is ErrorKind.DUPLICATE
    assert ForeignKeyViolationError("x").error_code is ErrorKind.FOREIGN_KEY_VIOLATION
    assert DatabaseError("x").error_code is ErrorKind.DATABASE
    assert SerializationError("x").error_code is ErrorKind.SERIALIZATION


def test_all_errors_share_the_base_class():
    for cls in (NotFoundError, DuplicateError, ForeignKeyViolationError, DatabaseError, SerializationError):
        assert issubclass(cls, RepositoryError)


def test_str_includes_fields_constraint_and_code():
    err = DuplicateError("User already exists", fields=["email"], constraint="uq_users_email")
    assert str(err) == "User already exists (fields: email; constraint: uq_users_email; code: duplicate)"


def test_payload_leaves_out_constraint():
    err = DuplicateError("User already exists", fields=["email"], constraint="uq_users_email")
    assert err.to_payload() == {"detail": "User already exists", "code": "duplicate", "fields": ["email"]}


def test_error_kind_compares_to_plain_strings():
    assert ErrorKind.FOREIGN_KEY_VIOLATION == "foreign_key_violation"
