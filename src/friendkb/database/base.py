"""
Declarative base shared by every ORM model in `friendkb.models`.

The schema itself is owned by the migration collaborator; `Base.metadata` mirrors it
so repositories can build typed statements and tests can `create_all` a scratch
database.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase


# Naming convention for constraints and indexes. Constraint names surface in
# vendor error diagnostics, so they must be stable.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
