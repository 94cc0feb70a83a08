"""Transcript extraction over a chain of routes.

For each route, in order: fetch the watch page, find its caption tracks, pick
one, fetch that track's timed-text document through the same route and decode
it. The first route that gets all the way through wins. Routes are tried
strictly one after another and never retried; only the last route's error is
kept for the final failure.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from captrix.errors import ExtractionFailedError, NoCaptionsFoundError, RouteFetchError
from captrix.fetch import FetchResponse, Fetcher
from captrix.logging import logger, route_context
from captrix.models import CaptionTrack, extract_video_id, watch_url
from captrix.routes import Route
from captrix.timedtext import decode_timed_text
from captrix.tracks import extract_caption_tracks, select_track


@dataclass
class ExtractionResult:
    """Outcome of a successful extraction."""

    video_id: str
    transcript: str
    route: str  # Name of the route that succeeded
    track: CaptionTrack
    attempts: int  # Routes tried, including the successful one


class TranscriptExtractor:
    """Runs the route fallback chain with an injected fetcher.

    Holds no per-call state, so one instance can serve concurrent calls if
    the fetcher allows it.
    """

    def __init__(self, fetcher: Fetcher, routes: Sequence[Route]) -> None:
        self._fetcher = fetcher
        self._routes = tuple(routes)

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._routes

    def _get(self, route: Route, url: str) -> FetchResponse:
        response = self._fetcher.fetch(route.wrap(url))
        if not response.ok:
            raise RouteFetchError(
                f"{route.name} returned status {response.status_code}",
                url=url,
                status_code=response.status_code,
            )
        return response

    def _page_tracks(self, route: Route, video_id: str) -> list[CaptionTrack]:
        html = self._get(route, watch_url(video_id)).text
        tracks = extract_caption_tracks(html)
        if not tracks:
            # Consent pages and age gates land here as well
            raise NoCaptionsFoundError("No caption tracks found in page.")
        return tracks

    def _attempt(self, route: Route, video_id: str) -> ExtractionResult:
        tracks = self._page_tracks(route, video_id)
        track = select_track(tracks)
        logger.debug(
            "Selected track lang={} kind={} from {} tracks",
            track.language_code,
            track.kind.value,
            len(tracks),
        )
        xml = self._get(route, track.source_url).text
        return ExtractionResult(
            video_id=video_id,
            transcript=decode_timed_text(xml),
            route=route.name,
            track=track,
            attempts=0,
        )

    def extract(self, url_or_id: str) -> ExtractionResult:
        """Extract the transcript of a video.

        Args:
            url_or_id: Video URL or ID (validated before any network access)

        Returns:
            ExtractionResult from the first route that succeeded

        Raises:
            InvalidVideoIdError: If the input holds no valid video ID
            ExtractionFailedError: If every route failed; carries the last cause
        """
        video_id = extract_video_id(url_or_id)
        last_error: Exception | None = None

        for attempt, route in enumerate(self._routes, start=1):
            logger.debug("Attempt {}/{} via {}", attempt, len(self._routes), route.name)
            try:
                with route_context(route.name):
                    result = self._attempt(route, video_id)
            except Exception as e:
                logger.warning("Route {} failed: {}", route.name, e)
                last_error = e
                continue
            result.attempts = attempt
            logger.info(
                "Transcript for {} extracted via {} ({} chars)",
                video_id,
                route.name,
                len(result.transcript),
            )
            return result

        raise ExtractionFailedError(cause=last_error, attempts=len(self._routes))

    def list_tracks(self, url_or_id: str) -> list[CaptionTrack]:
        """List caption tracks from the first route whose page exposes any.

        Raises:
            InvalidVideoIdError: If the input holds no valid video ID
            ExtractionFailedError: If no route yielded tracks
        """
        video_id = extract_video_id(url_or_id)
        last_error: Exception | None = None

        for route in self._routes:
            try:
                with route_context(route.name):
                    return self._page_tracks(route, video_id)
            except Exception as e:
                logger.warning("Route {} failed: {}", route.name, e)
                last_error = e

        raise ExtractionFailedError(cause=last_error, attempts=len(self._routes))


def extract_transcript(url_or_id: str, fetcher: Fetcher, routes: Sequence[Route]) -> str:
    """Extract a video's transcript text.

    Raises:
        InvalidVideoIdError: If the input holds no valid video ID
        ExtractionFailedError: If every route failed
    """
    return TranscriptExtractor(fetcher, routes).extract(url_or_id).transcript
