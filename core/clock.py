# =============================================================================
# core/clock.py  —  Current time in an IANA timezone
# =============================================================================
#
# Uses the standard library's zoneinfo database (the `tzdata` package backs
# it on platforms without system zone files).  An unknown zone is a normal
# answer, not an exception: the caller gets an explanatory "Error: ..." text.
# =============================================================================

from datetime import datetime, timezone as dt_timezone
import logging
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.models import ToolResult

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def current_time(timezone: str, now: Optional[datetime] = None) -> str:
    """Format `now` (default: the current instant) in `timezone`.

    Raises ZoneInfoNotFoundError, ValueError or OSError for identifiers that
    zoneinfo cannot resolve.
    """
    zone = ZoneInfo(timezone)
    instant = now or datetime.now(dt_timezone.utc)
    return instant.astimezone(zone).strftime(TIME_FORMAT)


def handle_now(args, now: Optional[datetime] = None) -> ToolResult:
    try:
        formatted = current_time(args.timezone, now)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        logger.info("Invalid timezone %r: %s", args.timezone, e)
        return ToolResult.error(
            f"'{args.timezone}' is not a valid timezone. "
            "Use an IANA timezone name (e.g. Asia/Seoul, America/New_York)."
        )
    return ToolResult.text(f"[{args.timezone}] current time: {formatted}")
