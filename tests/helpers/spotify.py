"""Stand-in for ``spotipy.Spotify`` returning canned payloads."""

from __future__ import annotations

SpotifyPayload = dict[str, object]


class FakeSpotipy:
    """Replays canned payloads for the two spotipy calls the client makes."""

    def __init__(
        self,
        *,
        albums: dict[str, SpotifyPayload] | None = None,
        search_payload: SpotifyPayload | None = None,
        error: Exception | None = None,
    ) -> None:
        self.albums = albums or {}
        self.search_payload = search_payload or {"albums": {"items": []}}
        self.error = error
        self.calls: list[tuple[str, dict[str, object]]] = []

    def album(self, album_id: str) -> SpotifyPayload:
        self.calls.append(("album", {"album_id": album_id}))
        if self.error is not None:
            raise self.error
        return self.albums[album_id]

    def search(self, q: str, limit: int = 10, type: str = "track") -> SpotifyPayload:  # noqa: A002
        self.calls.append(("search", {"q": q, "limit": limit, "type": type}))
        if self.error is not None:
            raise self.error
        return self.search_payload
