"""Small, pure helpers used by the settings validators."""


def normalize_case(value: str | None, *, upper: bool) -> str | None:
    """
    Return `value` stripped and case-folded, or None when the value is unset.

    Environment files are often hand-edited, so " debug" or "JSON" must still
    match the Literal choices declared on Settings.
    """
    if value is None:
        return None
    value = str(value).strip()
    return value.upper() if upper else value.lower()
