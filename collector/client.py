# =============================================================================
# TELEWIND COLLECTOR
# Module: collector/client.py
# Purpose: HTTP client for the anemometer page with retries and timeouts
# =============================================================================
#
# DESIGN:
# - One GET per poll, bounded retries with exponential backoff
# - 4xx responses (other than 429) are not retried
# - Every failure surfaces as FetchError / ParseError so the window can
#   log it and try again on the next tick
#
# =============================================================================

import logging
import time
from typing import List

import requests

from models.data_models import Observation

from .errors import FetchError
from .parser import parse_observations

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_URL = "http://3volna.ru/anemometer/getwind?id=1"


class AnemometerClient:
    """
    HTTP client for the anemometer page.

    Features:
    - Exponential backoff retry logic
    - Configurable timeouts
    - Clear error logging
    """

    DEFAULT_TIMEOUT = 15  # seconds
    MAX_RETRIES = 2
    INITIAL_BACKOFF = 1.0  # seconds
    MAX_BACKOFF = 10.0  # seconds

    def __init__(
        self,
        url: str = DEFAULT_SOURCE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = MAX_RETRIES,
        sleep=time.sleep,
    ):
        """
        Initialize the anemometer client.

        Args:
            url: Page to download
            timeout: Request timeout in seconds
            max_retries: Maximum number of attempts per fetch
            sleep: Sleep function used between attempts
        """
        self.url = url
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self._sleep = sleep

    def fetch_html(self) -> str:
        """
        Download the page body.

        Returns:
            Response text

        Raises:
            FetchError: If all retry attempts fail
        """
        backoff = self.INITIAL_BACKOFF
        last_error = None

        for attempt in range(self.max_retries):
            try:
                logger.debug(f"Request attempt {attempt + 1}: {self.url}")
                response = requests.get(
                    self.url,
                    headers={"User-Agent": "Telewind/1.0"},
                    timeout=self.timeout,
                )
                response.raise_for_status()
                return response.text

            except requests.HTTPError as e:
                last_error = e
                status = e.response.status_code if e.response is not None else None
                logger.warning(f"HTTP error {status} on attempt {attempt + 1}: {self.url}")

                if status is not None and 400 <= status < 500 and status != 429:
                    raise FetchError(f"Client error {status} for {self.url}") from e

            except requests.RequestException as e:
                last_error = e
                logger.warning(f"Request error on attempt {attempt + 1}: {e}")

            if attempt < self.max_retries - 1:
                sleep_time = min(backoff, self.MAX_BACKOFF)
                logger.info(f"Retrying in {sleep_time:.1f}s...")
                self._sleep(sleep_time)
                backoff *= 2

        raise FetchError(
            f"All {self.max_retries} attempts failed for {self.url}. Last error: {last_error}"
        )

    def fetch_observations(self) -> List[Observation]:
        """
        Download and decode the current snapshot.

        Returns:
            Observations in page order (unsorted)

        Raises:
            FetchError: If the page cannot be downloaded
            ParseError: If the page cannot be decoded
        """
        return parse_observations(self.fetch_html())
