"""Deterministic names for indexes and foreign keys created without one."""

import zlib
from typing import Iterable

MAX_IDENTIFIER_LENGTH = 63


def generate_identifier_name(parts: Iterable[str], prefix: str, max_size: int = MAX_IDENTIFIER_LENGTH) -> str:
    """
    Build ``<PREFIX>_<HASH>`` from the CRC32 of each part.

    The hash is the concatenated lower-case hex CRC32 of every part, then the
    whole name is upper-cased and truncated to ``max_size`` characters.

    Examples:
        >>> generate_identifier_name(["test", "foo", "bar"], "uniq")
        'UNIQ_D87F7E0C8C73652176FF8CAA'
    """
    digest = "".join(format(zlib.crc32(part.encode("utf-8")), "x") for part in parts)
    return f"{prefix}_{digest}"[:max_size].upper()
