"""
Client for the Český rozhlas playlist API.

The API publishes one JSON document per station and day listing everything
that was broadcast, in broadcast order.
"""

from typing import List, Optional
import requests
from radiowave_sync.date_parser import CalendarDate
from radiowave_sync.models import PlaylistEntry
from radiowave_sync.utils.logger import get_logger


logger = get_logger()


class FetchError(Exception):
    """Exception raised when the radio playlist cannot be fetched or decoded."""
    pass


class RadioClient:
    """Client for fetching daily station playlists."""

    BASE_URL = "https://api.rozhlas.cz/data/v2/playlist/day"
    DEFAULT_STATION = "radiowave"

    def __init__(self, station: str = DEFAULT_STATION, timeout: Optional[float] = None):
        """
        Initialize radio client.

        Args:
            station: Station slug used in the archive path
            timeout: Request timeout in seconds (None waits indefinitely)
        """
        self.station = station
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({
            "Accept": "application/json",
        })

    def playlist_url(self, date: CalendarDate) -> str:
        """Build the archive URL for the given day."""
        return (
            f"{self.BASE_URL}/{date.year:04d}/{date.month:02d}/{date.day:02d}"
            f"/{self.station}.json"
        )

    def _get(self, url: str) -> requests.Response:
        try:
            return self._session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.debug(f"Radio API request failed for {url}: {e}")
            raise FetchError(f"Radio API request failed: {e}") from e

    def _decode_entries(self, response: requests.Response) -> List[PlaylistEntry]:
        try:
            payload = response.json()
        except ValueError as e:
            # requests' JSONDecodeError is a ValueError subclass
            raise FetchError(f"Radio API returned invalid JSON: {e}") from e

        items = payload.get('data') if isinstance(payload, dict) else None
        if not isinstance(items, list):
            raise FetchError("Radio API response has no 'data' list")

        entries = []
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise FetchError(f"Radio API item {index} is not an object")

            artist = item.get('interpret')
            title = item.get('track')
            if not isinstance(artist, str) or not isinstance(title, str):
                raise FetchError(
                    f"Radio API item {index} is missing 'interpret' or 'track'"
                )

            entries.append(PlaylistEntry(artist=artist, title=title))
        return entries

    def fetch_playlist(self, date: CalendarDate) -> List[PlaylistEntry]:
        """
        Fetch the station playlist for one day.

        The body is decoded whatever the status code, so an error status
        carrying a well-formed playlist body is not a failure.

        Args:
            date: Day to fetch

        Returns:
            List of PlaylistEntry in broadcast order

        Raises:
            FetchError: On transport failure, or a body that does not match
                {"data": [{"interpret": ..., "track": ...}]}
        """
        url = self.playlist_url(date)
        logger.debug(f"GET {url}")

        response = self._get(url)
        try:
            entries = self._decode_entries(response)
        except FetchError as e:
            if not response.ok:
                raise FetchError(
                    f"Radio API request failed with status {response.status_code}: {e}"
                ) from e
            raise

        if not response.ok:
            logger.debug(f"Radio API answered {response.status_code} with a playlist body")

        logger.debug(f"Retrieved {len(entries)} tracks from {self.station} for {date}")
        return entries
