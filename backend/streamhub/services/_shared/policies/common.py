from __future__ import annotations

from streamhub.services._shared.errors import InvalidTargetError


def parse_entity_id(raw: object) -> int:
    """Parse a path identifier into a positive integer.

    Accepts ints and strings of ASCII digits only (no sign, no whitespace).

    :raises InvalidTargetError: For anything else, including ``bool`` and ``0``.
    """
    if isinstance(raw, bool):
        raise InvalidTargetError(raw)
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and raw.isascii() and raw.isdigit():
        value = int(raw)
    else:
        raise InvalidTargetError(raw)
    if value <= 0:
        raise InvalidTargetError(raw)
    return value
