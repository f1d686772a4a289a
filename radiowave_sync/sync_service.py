"""Synchronization service for recreating a Radio Wave day as a Spotify playlist."""

import argparse
import json
import sys
from datetime import datetime
from typing import Dict, List, Optional, Sequence
from dotenv import load_dotenv
from radiowave_sync.date_parser import CalendarDate, DateParseError, parse_date
from radiowave_sync.models import MatchResult, PlaylistEntry
from radiowave_sync.radio_client import FetchError, RadioClient
from radiowave_sync.spotify_client import SpotifyClient
from radiowave_sync.utils.credentials import AuthError, load_credentials
from radiowave_sync.utils.logger import setup_logger


PLAYLIST_NAME_TEMPLATE = "Radio Wave {date}"
PLAYLIST_DESCRIPTION_TEMPLATE = "Playlist for Radio Wave for {date}"


class SyncError(Exception):
    """Exception raised when the Spotify playlist cannot be built."""
    pass


class CreateFailedError(SyncError):
    """The destination playlist could not be created."""
    pass


class ItemTransportError(SyncError):
    """A search or add call failed mid-loop; remaining entries were skipped."""
    pass


class SyncReport:
    """Report of one synchronization run."""

    def __init__(self, date: Optional[CalendarDate] = None):
        """Initialize empty sync report."""
        self.date = date
        self.start_time = datetime.now()
        self.end_time = None
        self.playlist_id = None
        self.playlist_name = None
        self.entries_fetched = 0
        self.added_tracks = []
        self.missing_tracks = []
        self.errors = []

    @property
    def tracks_added(self) -> int:
        return len(self.added_tracks)

    @property
    def tracks_not_found(self) -> int:
        return len(self.missing_tracks)

    def add_added_track(self, match: MatchResult):
        """Record a track added to the playlist."""
        self.added_tracks.append({
            'artist': match.entry.artist,
            'title': match.entry.title,
            'spotify_id': match.track_id,
            'spotify_name': match.name
        })

    def add_missing_track(self, entry: PlaylistEntry):
        """Record an entry that had no search result."""
        self.missing_tracks.append({
            'artist': entry.artist,
            'title': entry.title,
            'query': entry.query
        })

    def add_error(self, error: str):
        """Record an error."""
        self.errors.append(error)

    def finalize(self):
        """Mark sync as complete."""
        self.end_time = datetime.now()

    def match_rate(self) -> Optional[float]:
        attempted = self.tracks_added + self.tracks_not_found
        if not attempted:
            return None
        return self.tracks_added / attempted * 100

    def to_dict(self) -> Dict:
        """Convert report to dictionary."""
        duration = None
        if self.end_time:
            duration = (self.end_time - self.start_time).total_seconds()

        rate = self.match_rate()
        return {
            'date': str(self.date) if self.date else None,
            'start_time': self.start_time.isoformat(),
            'end_time': self.end_time.isoformat() if self.end_time else None,
            'duration_seconds': duration,
            'playlist_id': self.playlist_id,
            'playlist_name': self.playlist_name,
            'entries_fetched': self.entries_fetched,
            'tracks_added': self.tracks_added,
            'tracks_not_found': self.tracks_not_found,
            'match_rate': f"{rate:.2f}%" if rate is not None else "0%",
            'added_tracks': self.added_tracks,
            'missing_tracks': self.missing_tracks,
            'errors': self.errors
        }

    def save_to_file(self, filepath: str):
        """Save report to JSON file."""
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)


class PlaylistSyncService:
    """Service for copying a day of Radio Wave broadcasts into Spotify."""

    def __init__(self, radio_client: RadioClient = None, spotify_client: SpotifyClient = None,
                 log_file: str = None):
        """
        Initialize sync service.

        Args:
            radio_client: Source playlist client (default: RadioClient())
            spotify_client: Destination client; built from the environment
                by authenticate() when not given
            log_file: Optional path to log file
        """
        self.logger = setup_logger(log_file=log_file)
        if log_file:
            self.logger.debug(f"Sync log file: {log_file}")

        self.radio_client = radio_client or RadioClient()
        self.spotify_client = spotify_client
        self.report = SyncReport()

    def fetch_entries(self, date: CalendarDate) -> List[PlaylistEntry]:
        """
        Fetch the radio playlist for a day.

        Raises:
            FetchError: If the radio API call fails
        """
        self.report.date = date
        self.logger.info(f"Fetching playlist for {date}")
        try:
            entries = self.radio_client.fetch_playlist(date)
        except FetchError as e:
            self.report.add_error(f"Error fetching radio playlist: {e}")
            raise

        self.report.entries_fetched = len(entries)
        self.logger.info(f"Found {len(entries)} tracks")
        return entries

    def authenticate(self) -> SpotifyClient:
        """
        Authenticate against Spotify, blocking on browser consent if needed.

        Raises:
            AuthError: If credentials are missing or the OAuth flow fails
        """
        try:
            if self.spotify_client is None:
                self.spotify_client = SpotifyClient(load_credentials())
            self.logger.info("Authenticating with Spotify...")
            self.spotify_client.authenticate_user()
        except AuthError as e:
            self.report.add_error(str(e))
            raise
        return self.spotify_client

    def _create_playlist(self, date: CalendarDate) -> str:
        name = PLAYLIST_NAME_TEMPLATE.format(date=date)
        description = PLAYLIST_DESCRIPTION_TEMPLATE.format(date=date)
        try:
            user_id = self.spotify_client.get_user_id()
            playlist_id = self.spotify_client.create_playlist(user_id, name, description)
        except Exception as e:
            self.report.add_error(f"Failed to create playlist {name}: {e}")
            raise CreateFailedError(f"Failed to create playlist {name}: {e}") from e

        self.report.playlist_id = playlist_id
        self.report.playlist_name = name
        self.logger.info(f"Created playlist: {name}")
        return playlist_id

    def sync(self, date: CalendarDate, entries: Sequence[PlaylistEntry]) -> SyncReport:
        """
        Create the day's playlist and add the first search match per entry.

        A missing search result is reported and skipped. A failing Spotify
        call aborts the loop; tracks already added stay on the playlist.

        Args:
            date: Broadcast day, used in the playlist name
            entries: Radio playlist entries in broadcast order

        Returns:
            The run report

        Raises:
            AuthError: If Spotify authentication fails
            CreateFailedError: If the playlist cannot be created
            ItemTransportError: If a search or add call fails
        """
        self.report.date = date
        if self.spotify_client is None or self.spotify_client.sp is None:
            self.authenticate()

        playlist_id = self._create_playlist(date)

        for entry in entries:
            try:
                match = self.spotify_client.search_track(entry)
                if match.found:
                    self.spotify_client.add_track(playlist_id, match.track_id)
            except Exception as e:
                self.report.add_error(f"Error syncing '{entry.query}': {e}")
                raise ItemTransportError(f"Error syncing '{entry.query}': {e}") from e

            if match.found:
                self.report.add_added_track(match)
                self.logger.info(f"- Added track: {match.name or entry.query}")
            else:
                self.report.add_missing_track(entry)
                self.logger.warning(f"- Track not found: {entry.query}")

        return self.report

    def log_summary(self):
        """Log the end-of-run counts."""
        self.logger.info("")
        self.logger.info("=" * 60)
        if self.report.playlist_name:
            self.logger.info(f"Playlist: {self.report.playlist_name}")
        self.logger.info(f"Tracks added: {self.report.tracks_added}")
        self.logger.info(f"Tracks not found: {self.report.tracks_not_found}")
        rate = self.report.match_rate()
        if rate is not None:
            self.logger.info(f"Match rate: {rate:.2f}%")
        self.logger.info("=" * 60)

    def dry_run(self, date: CalendarDate) -> List[PlaylistEntry]:
        """Fetch and list the search queries without touching Spotify."""
        entries = self.fetch_entries(date)
        self.logger.info("DRY RUN MODE - Spotify will not be contacted")
        for entry in entries:
            self.logger.info(f"- Would search: {entry.query}")
        self.report.finalize()
        return entries

    def run(self, date: CalendarDate) -> SyncReport:
        """
        Fetch the day's radio playlist and recreate it on Spotify.

        Raises:
            FetchError, AuthError, SyncError: First failure aborts the run
        """
        try:
            entries = self.fetch_entries(date)
            self.sync(date, entries)
        finally:
            self.report.finalize()
            # Also reached when the populate loop aborted
            if self.report.playlist_id:
                self.log_summary()
        return self.report


class _UsageParser(argparse.ArgumentParser):
    """ArgumentParser that exits 1 on usage errors, like a bad date does."""

    def error(self, message):
        self.print_usage(sys.stderr)
        print(f"{self.prog}: error: {message}", file=sys.stderr)
        sys.exit(1)


def _build_parser() -> argparse.ArgumentParser:
    parser = _UsageParser(
        prog="radiowave-sync",
        description="Recreate a day of Radio Wave broadcasts as a Spotify playlist"
    )
    parser.add_argument(
        'date',
        nargs='?',
        help='Broadcast day in YYYY-MM-DD format'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Fetch the radio playlist and list the searches without touching Spotify'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Path to log file (optional)'
    )
    parser.add_argument(
        '--report',
        type=str,
        default=None,
        help='Write a JSON run report to this path (optional)'
    )
    return parser


def main(argv: List[str] = None):
    """Main entry point for CLI."""
    load_dotenv()

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.date is None:
        print(f"Usage: {parser.prog} <date in YYYY-MM-DD format>", file=sys.stderr)
        sys.exit(1)

    try:
        date = parse_date(args.date)
    except DateParseError:
        print("Invalid date format", file=sys.stderr)
        sys.exit(1)

    service = PlaylistSyncService(log_file=args.log_file)

    try:
        if args.dry_run:
            service.dry_run(date)
        else:
            service.run(date)
    except KeyboardInterrupt:
        print("\n\nSync interrupted by user", file=sys.stderr)
        sys.exit(1)
    except FetchError as e:
        print(f"Error fetching radio playlist: {e}", file=sys.stderr)
    except (AuthError, SyncError) as e:
        print(f"Error creating Spotify playlist: {e}", file=sys.stderr)
    finally:
        if args.report:
            try:
                service.report.save_to_file(args.report)
            except OSError as e:
                print(f"Could not write report {args.report}: {e}", file=sys.stderr)

    # Network failures are reported but do not change the exit status
    sys.exit(0)


if __name__ == '__main__':
    main()
