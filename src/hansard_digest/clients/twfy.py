"""HTTP client for the TheyWorkForYou scraped Hansard XML feed."""

from __future__ import annotations

from datetime import date, timedelta
from threading import Event
from typing import Dict, Iterable, Iterator, Optional
import logging

import httpx

from ..core.types import SittingDocument

LOGGER = logging.getLogger(__name__)

SITTING_SUFFIXES = ("a", "b", "c", "d")

_CHAMBER_PATHS: Dict[str, str] = {
    "commons": "debates/debates{date}{suffix}.xml",
    "lords": "lordspages/daylord{date}{suffix}.xml",
    "westminster": "westminhall/westminster{date}{suffix}.xml",
}


class FeedClientError(RuntimeError):
    """Raised when the transcript feed cannot be read."""


class TheyWorkForYouClient:
    """Downloads the published XML of individual sittings."""

    def __init__(
        self,
        base_url: str = "https://www.theyworkforyou.com/pwdata/scrapedxml",
        *,
        timeout: float = 30.0,
        max_retries: int = 3,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._max_retries = max(1, max_retries)
        self._client = http_client or httpx.Client(timeout=timeout, follow_redirects=True)

    # --- public API -----------------------------------------------------
    def sitting_url(self, chamber: str, sitting_date: date, suffix: str = "a") -> str:
        try:
            template = _CHAMBER_PATHS[chamber]
        except KeyError:
            raise ValueError(
                f"Invalid chamber {chamber!r}. Must be one of {', '.join(_CHAMBER_PATHS)}"
            ) from None
        path = template.format(date=sitting_date.isoformat(), suffix=suffix)
        return f"{self._base_url}/{path}"

    def fetch_sitting(self, chamber: str, sitting_date: date, suffix: str = "a") -> Optional[SittingDocument]:
        """Download one sitting, returning ``None`` when it was not published."""

        url = self.sitting_url(chamber, sitting_date, suffix)
        content = self._get(url)
        if content is None:
            return None
        LOGGER.info("Received %s bytes of XML for %s %s%s", len(content), chamber, sitting_date, suffix)
        return SittingDocument(chamber=chamber, sitting_date=sitting_date, suffix=suffix, url=url, markup=content)

    def iter_sittings(
        self,
        chamber: str,
        start: date,
        end: Optional[date] = None,
        *,
        suffixes: Iterable[str] = SITTING_SUFFIXES,
        cancel_event: Optional[Event] = None,
    ) -> Iterator[SittingDocument]:
        """Yield every published sitting between ``start`` and ``end`` inclusive.

        Iteration stops before the next request once ``cancel_event`` is set.
        """

        suffixes = tuple(suffixes)
        current = start
        last = end or start
        while current <= last:
            for suffix in suffixes:
                if cancel_event and cancel_event.is_set():
                    LOGGER.info("Stopping %s feed iteration before %s%s", chamber, current, suffix)
                    return
                document = self.fetch_sitting(chamber, current, suffix)
                if document is not None:
                    yield document
            current += timedelta(days=1)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "TheyWorkForYouClient":  # pragma: no cover - trivial
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - trivial
        self.close()

    # --- helpers --------------------------------------------------------
    def _get(self, url: str) -> Optional[bytes]:
        last_exc: Optional[Exception] = None
        for attempt in range(1, self._max_retries + 1):
            try:
                response = self._client.get(url, headers={"Accept": "application/xml"})
                if response.status_code == 404:
                    LOGGER.debug("No sitting published at %s", url)
                    return None
                response.raise_for_status()
                return response.content
            except httpx.HTTPStatusError as exc:
                last_exc = exc
                LOGGER.warning(
                    "Feed returned status %s for %s (attempt %s/%s)",
                    exc.response.status_code,
                    url,
                    attempt,
                    self._max_retries,
                )
            except httpx.HTTPError as exc:
                last_exc = exc
                LOGGER.warning("HTTP error while requesting %s: %s", url, exc)
        raise FeedClientError(f"Failed to fetch {url}") from last_exc


__all__ = ["FeedClientError", "SITTING_SUFFIXES", "TheyWorkForYouClient"]
