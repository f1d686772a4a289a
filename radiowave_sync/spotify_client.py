"""Spotify API client for creating and populating playlists."""

from typing import Optional
import spotipy
from spotipy.oauth2 import SpotifyOAuth
from radiowave_sync.models import MatchResult, PlaylistEntry
from radiowave_sync.utils.credentials import AuthError, SpotifyCredentials
from radiowave_sync.utils.logger import get_logger


logger = get_logger()

# Write-only access: the sync never reads the user's library
SCOPES = ["playlist-modify-public", "playlist-modify-private"]


class SpotifyClient:
    """Client for interacting with Spotify Web API."""

    def __init__(self, credentials: SpotifyCredentials):
        """
        Initialize Spotify client.

        Args:
            credentials: OAuth client configuration
        """
        self.credentials = credentials
        self.sp: Optional[spotipy.Spotify] = None
        self.user_id: Optional[str] = None

    def authenticate_user(self) -> None:
        """
        Authenticate user with Spotify using the authorization-code flow.

        Opens the authorize URL in a browser (or prints it) and blocks until
        the redirected URL is pasted back. A cached token is reused when
        present.

        Raises:
            AuthError: If authentication fails
        """
        try:
            auth_manager = SpotifyOAuth(
                client_id=self.credentials.client_id,
                client_secret=self.credentials.client_secret,
                redirect_uri=self.credentials.redirect_uri,
                scope=" ".join(SCOPES),
                cache_path=self.credentials.cache_path,
                open_browser=True
            )
            auth_url = auth_manager.get_authorize_url()
            logger.debug(f"Spotify authorize URL: {auth_url}")

            # Triggers the interactive consent prompt when no token is cached
            auth_manager.get_access_token(as_dict=False)

            self.sp = spotipy.Spotify(auth_manager=auth_manager)
        except Exception as e:
            logger.debug(f"Spotify authentication failed: {e}")
            raise AuthError(f"Spotify authentication failed: {e}") from e

    def _require_auth(self) -> spotipy.Spotify:
        if not self.sp:
            raise AuthError("Not authenticated. Call authenticate_user() first.")
        return self.sp

    def get_user_id(self) -> str:
        """
        Resolve the authenticated user's account id.

        Raises:
            AuthError: If not authenticated
            spotipy.SpotifyException: If the API call fails
        """
        sp = self._require_auth()
        user = sp.current_user()
        self.user_id = user['id']
        logger.debug(f"Authenticated as Spotify user: {user.get('display_name') or self.user_id}")
        return self.user_id

    def create_playlist(self, user_id: str, name: str, description: str) -> str:
        """
        Create a private, non-collaborative playlist.

        Args:
            user_id: Owner account id
            name: Playlist name
            description: Playlist description

        Returns:
            Playlist ID
        """
        sp = self._require_auth()
        playlist = sp.user_playlist_create(
            user_id,
            name,
            public=False,
            collaborative=False,
            description=description
        )
        logger.debug(f"Created Spotify playlist: {name} (ID: {playlist['id']})")
        return playlist['id']

    def search_track(self, entry: PlaylistEntry) -> MatchResult:
        """
        Search for the best single match of a playlist entry.

        Args:
            entry: Radio playlist entry

        Returns:
            MatchResult, with no track id when nothing usable was found
        """
        sp = self._require_auth()
        results = sp.search(
            q=entry.query,
            type="track",
            market="from_token",
            limit=1
        )

        items = (results.get('tracks') or {}).get('items') or []
        track = items[0] if items else None
        if not track or not track.get('id'):
            return MatchResult(entry)

        return MatchResult(entry, track_id=track['id'], name=track.get('name'))

    def add_track(self, playlist_id: str, track_id: str) -> None:
        """Append one track to a playlist."""
        sp = self._require_auth()
        sp.playlist_add_items(playlist_id, [track_id])
        logger.debug(f"Added track {track_id} to playlist {playlist_id}")
