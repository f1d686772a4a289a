"""Spotify credentials read from the process environment."""

import os
from typing import Mapping, Optional


class AuthError(Exception):
    """Exception raised when Spotify authentication cannot be completed."""
    pass


class CredentialsError(AuthError):
    """Exception raised when credentials are missing from the environment."""
    pass


REQUIRED_KEYS = [
    'SPOTIPY_CLIENT_ID',
    'SPOTIPY_CLIENT_SECRET',
    'SPOTIPY_REDIRECT_URI',
]


class SpotifyCredentials:
    """OAuth client configuration for the Spotify Web API."""

    def __init__(self, client_id: str, client_secret: str, redirect_uri: str,
                 cache_path: Optional[str] = None):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.cache_path = cache_path

    def __repr__(self) -> str:
        return f"SpotifyCredentials(client_id={self.client_id!r}, redirect_uri={self.redirect_uri!r})"


def load_credentials(environ: Optional[Mapping[str, str]] = None) -> SpotifyCredentials:
    """
    Build Spotify credentials from environment variables.

    Args:
        environ: Mapping to read from (default: os.environ)

    Returns:
        SpotifyCredentials with values read from:
        - SPOTIPY_CLIENT_ID
        - SPOTIPY_CLIENT_SECRET
        - SPOTIPY_REDIRECT_URI
        - SPOTIPY_CACHE_PATH (optional)

    Raises:
        CredentialsError: If required variables are missing or empty
    """
    if environ is None:
        environ = os.environ

    values = {key: (environ.get(key) or '').strip() for key in REQUIRED_KEYS}

    missing_keys = [key for key in REQUIRED_KEYS if not values[key]]
    if missing_keys:
        raise CredentialsError(
            f"Missing required credentials: {', '.join(missing_keys)}"
        )

    cache_path = (environ.get('SPOTIPY_CACHE_PATH') or '').strip() or None

    return SpotifyCredentials(
        client_id=values['SPOTIPY_CLIENT_ID'],
        client_secret=values['SPOTIPY_CLIENT_SECRET'],
        redirect_uri=values['SPOTIPY_REDIRECT_URI'],
        cache_path=cache_path,
    )
