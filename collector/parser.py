# =============================================================================
# TELEWIND COLLECTOR
# Module: collector/parser.py
# Purpose: Decode the anemometer HTML page into Observation records
# =============================================================================
#
# PAGE FORMAT:
# <table>
#   <tr><th>Time</th><th>Direction</th><th>Speed</th>...</tr>
#   <tr><td>29.10.2022 22:45</td><td>СЗЗ (301°)</td><td>4.2</td>...</tr>
# </table>
#
# - Rows containing a <th> are headers and are skipped
# - Time is local Vladivostok time, converted to a fixed +10:00 offset
# - Direction is the number before "°" (0-360, 360 folded to 0)
# - Any malformed data row fails the whole page (ParseError)
#
# Output order is the page order; no ordering guarantee.
#
# =============================================================================

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import List
from zoneinfo import ZoneInfo

from bs4 import BeautifulSoup

from models.data_models import Observation

from .errors import ParseError

logger = logging.getLogger(__name__)

SOURCE_TIMEZONE = ZoneInfo("Asia/Vladivostok")
VLAT = timezone(timedelta(hours=10), "VLAT")
TIME_FORMAT = "%d.%m.%Y %H:%M"

WIND_DIRECTION = re.compile(r"([0-9]{1,3})°")


def parse_time(text: str) -> datetime:
    """Parse `29.10.2022 22:45` (Vladivostok local time) to a +10:00 datetime."""
    try:
        local = datetime.strptime(text.strip(), TIME_FORMAT)
    except ValueError as e:
        raise ParseError(f"Invalid time '{text}': {e}") from e
    return local.replace(tzinfo=SOURCE_TIMEZONE).astimezone(VLAT)


def parse_direction(text: str) -> int:
    """Parse a direction cell such as `СЗЗ (301°)`."""
    match = WIND_DIRECTION.search(text)
    if match:
        direction = int(match.group(1))
        if direction <= 360:
            return direction % 360
    raise ParseError(f"Invalid wind direction '{text.strip()}'")


def parse_speed(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError as e:
        raise ParseError(f"Invalid wind speed '{text.strip()}'") from e


def parse_observations(html: str) -> List[Observation]:
    """
    Extract all observations from the anemometer page.

    Args:
        html: Raw HTML body

    Returns:
        Observations in page order

    Raises:
        ParseError: If any data row is incomplete or malformed
    """
    soup = BeautifulSoup(html, "html.parser")
    observations = []

    for row in soup.select("table tr"):
        if row.find("th") is not None:
            continue

        columns = row.find_all("td")
        if len(columns) < 3:
            raise ParseError(f"Expected 3 columns, found {len(columns)}: {row.get_text(' ', strip=True)}")

        observations.append(Observation(
            time=parse_time(columns[0].get_text()),
            direction=parse_direction(columns[1].get_text()),
            avg_speed=parse_speed(columns[2].get_text()),
        ))

    logger.debug(f"Parsed {len(observations)} observations")
    return observations

