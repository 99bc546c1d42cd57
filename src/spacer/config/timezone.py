"""Timezone resolution for spacer timestamps."""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..errors import TimezoneResolutionError

logger = logging.getLogger(__name__)


def parse_timezone(name: str) -> tzinfo:
    """
    Resolve an IANA zone name such as ``Europe/London``.

    Raises:
        TimezoneResolutionError: If the name is not a known zone
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise TimezoneResolutionError(f"unknown timezone '{name}'") from e


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """
    Resolve a configured zone name, falling back to local time.

    Returns None for local time, either because no zone was configured or
    because the configured one could not be resolved.
    """
    if not name:
        return None
    try:
        return parse_timezone(name)
    except TimezoneResolutionError as e:
        logger.warning("%s, using local time", e)
        return None
