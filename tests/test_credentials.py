"""Unit tests for environment credentials."""

import pytest
from unittest.mock import patch
from radiowave_sync.utils.credentials import AuthError, CredentialsError, load_credentials


@pytest.fixture
def environ():
    """A complete Spotify environment."""
    return {
        'SPOTIPY_CLIENT_ID': 'test_id_123',
        'SPOTIPY_CLIENT_SECRET': 'test_secret_456',
        'SPOTIPY_REDIRECT_URI': 'http://localhost:8888/callback',
    }


class TestLoadCredentials:
    """Test cases for load_credentials."""

    def test_load_credentials_success(self, environ):
        """Test reading all required variables."""
        creds = load_credentials(environ)

        assert creds.client_id == 'test_id_123'
        assert creds.client_secret == 'test_secret_456'
        assert creds.redirect_uri == 'http://localhost:8888/callback'
        assert creds.cache_path is None

    def test_load_credentials_cache_path(self, environ):
        """Test optional token cache location."""
        environ['SPOTIPY_CACHE_PATH'] = '/tmp/.spotify-cache'

        assert load_credentials(environ).cache_path == '/tmp/.spotify-cache'

    def test_load_credentials_missing_keys(self):
        """Test every missing key is named."""
        with pytest.raises(CredentialsError, match="SPOTIPY_CLIENT_SECRET, SPOTIPY_REDIRECT_URI"):
            load_credentials({'SPOTIPY_CLIENT_ID': 'test_id_123'})

    def test_load_credentials_blank_value(self, environ):
        """Test whitespace-only values count as missing."""
        environ['SPOTIPY_CLIENT_SECRET'] = '   '

        with pytest.raises(CredentialsError, match="SPOTIPY_CLIENT_SECRET"):
            load_credentials(environ)

    def test_load_credentials_with_spaces(self, environ):
        """Test values are stripped."""
        environ['SPOTIPY_CLIENT_ID'] = '  test_id_123  '

        assert load_credentials(environ).client_id == 'test_id_123'

    def test_load_credentials_defaults_to_os_environ(self, environ):
        """Test os.environ is read when no mapping is given."""
        with patch.dict('os.environ', environ, clear=True):
            creds = load_credentials()

        assert creds.client_id == 'test_id_123'

    def test_credentials_error_is_auth_error(self):
        """Test missing credentials are an authentication failure."""
        with pytest.raises(AuthError):
            load_credentials({})

    def test_repr_hides_secret(self, environ):
        """Test the client secret is not exposed in repr."""
        assert 'test_secret_456' not in repr(load_credentials(environ))
