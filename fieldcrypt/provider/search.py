"""
Equality search over record collections.

Values are compared exactly as stored. When the field holds ciphertext the
criteria must be ciphertext too, produced by the same provider.
"""

from collections.abc import Mapping
from typing import Any, Hashable, Iterable, List

_MISSING = object()


def field_value(record: Any, field: Hashable) -> Any:
    """
    Read a named field from a record.

    Mappings are read by key, other records by item lookup and then by
    attribute. Returns a sentinel when the record has no such field.
    """
    if isinstance(record, Mapping):
        return record.get(field, _MISSING)

    if hasattr(record, '__getitem__') and not isinstance(record, (str, bytes, bytearray)):
        try:
            return record[field]
        except (KeyError, IndexError, TypeError):
            pass

    if isinstance(field, str):
        return getattr(record, field, _MISSING)
    return _MISSING


def search(records: Iterable[Any], field: Hashable, criteria: Any) -> List[Any]:
    """
    Return every record whose field equals criteria, in input order.

    Args:
        records: Any iterable of records
        field: Field name (or key) to compare
        criteria: Value compared with ==, never encrypted or decrypted here

    Returns:
        List of matching records, empty if none match
    """
    matches = []
    for record in records:
        value = field_value(record, field)
        if value is not _MISSING and value == criteria:
            matches.append(record)
    return matches
