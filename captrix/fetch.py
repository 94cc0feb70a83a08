"""HTTP fetching behind an explicit, injectable client."""

from dataclasses import dataclass
from typing import Any, Protocol

import requests

from captrix.config import Config
from captrix.errors import RouteFetchError
from captrix.logging import logger


@dataclass
class FetchResponse:
    """Status code and decoded body of a fetch."""

    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Fetcher(Protocol):
    """Anything that can GET a URL.

    Implementations return a FetchResponse for any HTTP status and raise
    RouteFetchError on transport failures.
    """

    def fetch(self, url: str) -> FetchResponse: ...


class RequestsFetcher:
    """Fetcher backed by a requests.Session.

    Usage:
        with RequestsFetcher(timeout=20) as fetcher:
            response = fetcher.fetch(url)
    """

    def __init__(
        self,
        timeout: float,
        user_agent: str,
        session: requests.Session | None = None,
    ) -> None:
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "User-Agent": user_agent,
                "Accept-Language": "en-US,en;q=0.9",
            }
        )

    @property
    def timeout(self) -> float:
        return self._timeout

    def fetch(self, url: str) -> FetchResponse:
        """GET a URL.

        Raises:
            RouteFetchError: On connection errors, timeouts and other transport failures
        """
        logger.debug("GET {}", url[:120])
        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as e:
            raise RouteFetchError(f"Transport error: {e}", url=url) from e
        logger.debug("GET {} -> {}", url[:120], response.status_code)
        return FetchResponse(status_code=response.status_code, text=response.text)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "RequestsFetcher":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


def build_fetcher(config: Config) -> RequestsFetcher:
    """Create a fetcher from configuration."""
    return RequestsFetcher(timeout=config.timeout, user_agent=config.user_agent)
