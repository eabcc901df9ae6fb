"""
Field-encryption marking for SecretVault records.

SecretVault secret-shares any value wrapped as ``{"%allot": value}`` when a
record is written. Nothing is encrypted here; this module only rewrites the
record so the vault client knows which fields to protect.
"""

import logging
from typing import Any, Dict, Iterable, Mapping

logger = logging.getLogger(__name__)

ENCRYPTION_MARKER = "%allot"


def wrap_value(value: Any) -> Dict[str, Any]:
    """Wrap a single value in the encryption marker."""
    return {ENCRYPTION_MARKER: value}


def is_marked(value: Any) -> bool:
    """Check whether a value is already an encryption-marker wrapper."""
    return isinstance(value, Mapping) and len(value) == 1 and ENCRYPTION_MARKER in value


def _wrap_field(path: str, value: Any) -> Dict[str, Any]:
    if is_marked(value):
        logger.debug(f"Field '{path}' is already marked for encryption, wrapping again")
    return wrap_value(value)


def mark_for_encryption(record: Mapping[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    """
    Return a shallow copy of ``record`` with the named fields marked for encryption.

    Args:
        record: Record to prepare, with at most one level of nesting
        fields: Field paths to protect; ``parent.child`` addresses a nested field

    Returns:
        New record. The input and its nested mappings are left untouched.

    Paths that are not present in the record are skipped. Marking the same
    path twice wraps the wrapper, so callers must mark each path only once.
    """
    result = dict(record)

    for field in fields:
        if "." in field:
            parent, child = field.split(".", 1)
            nested = result.get(parent)
            if not isinstance(nested, Mapping) or child not in nested:
                continue
            nested = dict(nested)
            nested[child] = _wrap_field(field, nested[child])
            result[parent] = nested
        elif field in result:
            result[field] = _wrap_field(field, result[field])

    return result
