"""MusicBrainz API client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final, TypeVar

from pydantic import BaseModel, ValidationError

from albumlink.adapters.http_resilience import ResilientClient, build_limiter

from .schema import (
    MBEntityType,
    MusicBrainzReleaseGroup,
    MusicBrainzReleaseGroupSearch,
    MusicBrainzReleaseSearch,
)
from .translator import (
    translate_release,
    translate_release_group,
    translate_release_group_candidate,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from aiolimiter import AsyncLimiter

    from albumlink.config.http_resilience import ResilienceConfig
    from albumlink.config.musicbrainz import MusicBrainzConfig
    from albumlink.domain.types import ReleaseGroupCandidate, ReleaseGroupDetails, ReleaseMatch

    ClientFactory = Callable[[ResilienceConfig, AsyncLimiter | None], ResilientClient]

log = getLogger(__name__)

TModel = TypeVar("TModel", bound=BaseModel)

RELEASE_GROUP_INC: Final[tuple[str, ...]] = ("tags", "ratings", "artist-credits")
DEFAULT_SEARCH_LIMIT: Final[int] = 25


class MusicBrainzAPIError(RuntimeError):
    """Raised when the MusicBrainz API returns an unexpected response."""


def _default_client_factory(
    config: ResilienceConfig, limiter: AsyncLimiter | None
) -> ResilientClient:
    return ResilientClient(config, limiter=limiter)


def barcode_query(barcode: str) -> str:
    return f"barcode:{barcode}"


def catno_query(catno: str, label: str | None = None) -> str:
    query = f'catno:"{catno}"'
    if label:
        query += f' AND label:"{label}"'
    return query


class MusicBrainzClient:
    """Async client for the MusicBrainz web service.

    The HTTP client is opened lazily and kept for the lifetime of this object;
    close it with ``aclose`` or use the client as an async context manager.
    """

    def __init__(
        self,
        *,
        config: MusicBrainzConfig,
        limiter: AsyncLimiter | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._resilience = config.resilience
        self._limiter = limiter or build_limiter(self._resilience.ratelimit)
        self._client_factory = client_factory or _default_client_factory
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> MusicBrainzClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_release_group(self, release_group_id: str) -> ReleaseGroupDetails:
        payload = await self._request(
            f"{MBEntityType.RELEASE_GROUP}/{release_group_id}",
            params={"inc": "+".join(RELEASE_GROUP_INC)},
            model=MusicBrainzReleaseGroup,
        )
        return translate_release_group(payload)

    async def search_release_groups(
        self, query: str, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[ReleaseGroupCandidate]:
        payload = await self._request(
            f"{MBEntityType.RELEASE_GROUP}",
            params={"query": query, "limit": str(limit), "offset": "0"},
            model=MusicBrainzReleaseGroupSearch,
        )
        return [translate_release_group_candidate(group) for group in payload.release_groups]

    async def search_by_barcode(self, barcode: str) -> list[ReleaseMatch]:
        return await self._search_releases(barcode_query(barcode))

    async def search_by_catno(self, catno: str, label: str | None = None) -> list[ReleaseMatch]:
        return await self._search_releases(catno_query(catno, label))

    async def _search_releases(self, query: str) -> list[ReleaseMatch]:
        payload = await self._request(
            f"{MBEntityType.RELEASE}",
            params={"query": query},
            model=MusicBrainzReleaseSearch,
        )
        return [translate_release(release) for release in payload.releases]

    async def _request(
        self,
        path: str,
        *,
        params: dict[str, str],
        model: type[TModel],
    ) -> TModel:
        if self._resilience.base_url is None:
            raise MusicBrainzAPIError("Missing MusicBrainz base_url in resilience configuration")

        client = self._ensure_client()
        response = await client.get(path, params={"fmt": "json", **params})
        response.raise_for_status()

        try:
            payload = response.json()
        except ValueError as exc:
            raise MusicBrainzAPIError(f"MusicBrainz returned invalid JSON for {path}") from exc
        if not isinstance(payload, dict):
            raise MusicBrainzAPIError("Unexpected MusicBrainz response payload")

        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise MusicBrainzAPIError(f"Unexpected MusicBrainz payload for {path}: {exc}") from exc

    def _ensure_client(self) -> ResilientClient:
        if self._client is None:
            log.debug("Opening MusicBrainz HTTP client for %s", self._resilience.base_url)
            self._client = self._client_factory(self._resilience, self._limiter)
        return self._client
