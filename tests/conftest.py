"""Shared pytest fixtures for captrix tests."""

import json
from typing import Any

import pytest

from captrix.errors import RouteFetchError
from captrix.fetch import FetchResponse
from captrix.routes import Route

VIDEO_ID = "dQw4w9WgXcQ"

# --- Fake network ---


class FakeFetcher:
    """Test double for Fetcher that serves canned responses.

    Responses are looked up by exact URL. A value may be a FetchResponse, a
    plain string (served with status 200) or an exception to raise. Unknown
    URLs raise RouteFetchError. Every call is recorded in ``calls``.
    """

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses: dict[str, Any] = dict(responses or {})
        self.calls: list[str] = []
        self.closed = False

    def fetch(self, url: str) -> FetchResponse:
        self.calls.append(url)
        if url not in self.responses:
            raise RouteFetchError(f"Transport error: no route to {url}", url=url)
        value = self.responses[url]
        if isinstance(value, BaseException):
            raise value
        if isinstance(value, str):
            return FetchResponse(status_code=200, text=value)
        return value

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "FakeFetcher":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    """Empty fake fetcher; every URL fails until responses are added."""
    return FakeFetcher()


@pytest.fixture
def route_a() -> Route:
    """First test route with a distinctive prefix."""
    return Route(name="alpha", template="https://alpha.test/raw?url={url}")


@pytest.fixture
def route_b() -> Route:
    """Second test route using plus encoding."""
    return Route(name="beta", template="https://beta.test/?{url}", encoding="plus")


# --- Sample documents ---


def make_track(
    lang: str, kind: str | None = None, url: str | None = None, name: str | None = None
) -> dict[str, Any]:
    """Create a player-response caption track record."""
    record: dict[str, Any] = {
        "baseUrl": url or f"https://www.youtube.com/api/timedtext?v={VIDEO_ID}&lang={lang}",
        "name": {"simpleText": name or lang},
        "vssId": f".{lang}",
        "languageCode": lang,
        "isTranslatable": True,
    }
    if kind:
        record["kind"] = kind
    return record


def make_watch_page(tracks: list[dict[str, Any]]) -> str:
    """Create a watch page embedding tracks the way ytInitialPlayerResponse does."""
    player_response = {
        "videoDetails": {"videoId": VIDEO_ID, "title": "Test Video"},
        "captions": {
            "playerCaptionsTracklistRenderer": {
                "captionTracks": tracks,
                "audioTracks": [{"captionTrackIndices": [0]}],
            }
        },
    }
    return (
        "<!DOCTYPE html><html><head><title>Test Video - YouTube</title></head><body>"
        f"<script>var ytInitialPlayerResponse = {json.dumps(player_response)};</script>"
        "</body></html>"
    )


SAMPLE_TIMEDTEXT = (
    '<?xml version="1.0" encoding="utf-8" ?><transcript>'
    '<text start="0" dur="2.5">Hello&amp;World</text>'
    '<text start="65" dur="3">Second</text>'
    "</transcript>"
)

SAMPLE_TRANSCRIPT = "[00:00] Hello&World\n[01:05] Second"


@pytest.fixture
def watch_page() -> str:
    """Watch page with an auto-generated and a manual English track."""
    return make_watch_page([make_track("en", kind="asr"), make_track("en", url="https://manual.test/en")])


@pytest.fixture
def timedtext() -> str:
    """Minimal timed-text document with two entries."""
    return SAMPLE_TIMEDTEXT
