"""Plain records passed between the radio fetcher and the Spotify sync."""

from typing import Optional


class PlaylistEntry:
    """One broadcast item from the radio playlist."""

    def __init__(self, artist: str, title: str):
        """
        Initialize playlist entry.

        Args:
            artist: Performer name as broadcast ("interpret" in the API)
            title: Track title ("track" in the API)
        """
        self.artist = artist
        self.title = title

    @property
    def query(self) -> str:
        """Free-text Spotify search query, no normalization applied."""
        return f"{self.artist} {self.title}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, PlaylistEntry):
            return NotImplemented
        return self.artist == other.artist and self.title == other.title

    def __repr__(self) -> str:
        return f"PlaylistEntry(artist={self.artist!r}, title={self.title!r})"


class MatchResult:
    """Outcome of searching Spotify for one PlaylistEntry."""

    def __init__(self, entry: PlaylistEntry, track_id: Optional[str] = None, name: Optional[str] = None):
        self.entry = entry
        self.track_id = track_id
        self.name = name

    @property
    def found(self) -> bool:
        return self.track_id is not None

    def __repr__(self) -> str:
        if self.found:
            return f"MatchResult(query={self.entry.query!r}, track_id={self.track_id!r})"
        return f"MatchResult(query={self.entry.query!r}, not found)"
