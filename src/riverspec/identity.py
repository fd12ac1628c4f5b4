"""Entity identities: bare ids and service-scoped composite ids."""

from __future__ import annotations

from typing import NamedTuple

from .errors import IdentityFormatError

ID_DELIMITER = ","


class ServiceScopedId(NamedTuple):
    """Identity of an entity that lives under a service."""

    service: str
    id: str

    def __str__(self) -> str:
        return f"{self.service}{ID_DELIMITER}{self.id}"


def parse_composite_id(raw: str) -> ServiceScopedId:
    """Split 'service-id,id' into a ServiceScopedId.

    Raises IdentityFormatError unless there are exactly two non-empty parts.
    """
    parts = raw.split(ID_DELIMITER)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise IdentityFormatError(
            f"Expected import identifier with format: service-id{ID_DELIMITER}id. Got: {raw!r}"
        )
    return ServiceScopedId(service=parts[0], id=parts[1])
