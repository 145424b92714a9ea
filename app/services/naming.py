import re
import time
from typing import Optional

_WHITESPACE = re.compile(r"\s+")


def now_ms() -> int:
    return int(time.time() * 1000)


def make_public_id(
    voornaam: Optional[str],
    familienaam: Optional[str],
    timestamp_ms: Optional[int] = None,
) -> str:
    """
    Object name for an upload: ``<voornaam>_<familienaam>_<timestamp_ms>``,
    lower-cased, with every whitespace run collapsed to one underscore.
    Absent names contribute an empty string.
    """
    if timestamp_ms is None:
        timestamp_ms = now_ms()
    safe_name = _WHITESPACE.sub("_", f"{voornaam or ''}_{familienaam or ''}".lower())
    return f"{safe_name}_{timestamp_ms}"
