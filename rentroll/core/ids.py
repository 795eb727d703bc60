"""Identifier helpers."""

import uuid

from rentroll.core.exceptions import MalformedReferenceError


def parse_id(value: str, entity: str = "record") -> str:
    """Normalise a record id, rejecting anything that is not a UUID."""
    try:
        return str(uuid.UUID(str(value)))
    except ValueError as exc:
        raise MalformedReferenceError(f"Invalid {entity} ID") from exc
