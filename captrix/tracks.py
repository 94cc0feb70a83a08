"""Caption track discovery and selection.

The watch page embeds its player response as JSON; the available caption
tracks live under a "captionTracks" key. The page layout drifts and proxies
may return consent or error pages instead, so extraction is a cascade of
tolerant scans, and an empty result is a normal outcome.
"""

import json
import re
from collections.abc import Callable
from typing import Any

from captrix.errors import NoSuitableTrackError
from captrix.logging import logger
from captrix.models import CaptionTrack

_decoder = json.JSONDecoder()

_CAPTION_KEY_RE = re.compile(r'"captionTracks"\s*:\s*(?=\[)')
_TRACK_PREFIX_RE = re.compile(r'\{"baseUrl"\s*:\s*"')


def _records_from_caption_key(html: str) -> list[Any] | None:
    """Decode the JSON array following the first "captionTracks" key."""
    match = _CAPTION_KEY_RE.search(html)
    if not match:
        return None
    try:
        records, _ = _decoder.raw_decode(html, match.end())
    except json.JSONDecodeError as e:
        logger.debug("captionTracks array did not decode: {}", e)
        return None
    return records if isinstance(records, list) else None


def _records_from_fragments(html: str) -> list[Any] | None:
    """Decode each {"baseUrl": ...} object found anywhere in the page.

    Lossy fallback for pages where the captionTracks key itself is mangled.
    Fragments that fail to decode are skipped.
    """
    records: list[Any] = []
    for match in _TRACK_PREFIX_RE.finditer(html):
        try:
            record, _ = _decoder.raw_decode(html, match.start())
        except json.JSONDecodeError:
            continue
        records.append(record)
    return records or None


_TIERS: tuple[Callable[[str], list[Any] | None], ...] = (
    _records_from_caption_key,
    _records_from_fragments,
)


def _to_tracks(records: list[Any]) -> list[CaptionTrack]:
    tracks: list[CaptionTrack] = []
    seen: set[str] = set()
    for record in records:
        if not isinstance(record, dict) or not isinstance(record.get("baseUrl"), str):
            continue
        track = CaptionTrack.from_dict(record)
        if track.source_url in seen:
            continue  # Same track embedded twice
        seen.add(track.source_url)
        tracks.append(track)
    return tracks


def extract_caption_tracks(html: str) -> list[CaptionTrack]:
    """Find the caption tracks embedded in a watch page.

    Args:
        html: Fetched page body

    Returns:
        Tracks in page order; empty when the page has none (no captions,
        consent/age gate, or blocked), never raises for absence.
    """
    for tier in _TIERS:
        records = tier(html)
        if not records:
            continue
        tracks = _to_tracks(records)
        if tracks:
            logger.debug("Found {} caption tracks via {}", len(tracks), tier.__name__)
            return tracks
    return []


_RULES: tuple[Callable[[CaptionTrack], bool], ...] = (
    # Manually authored English
    lambda t: t.language_code == "en" and not t.is_auto_generated,
    # Any English
    lambda t: t.language_code == "en",
    # Regional English variants (en-US, en-GB, ...)
    lambda t: t.language_code.startswith("en"),
)


def select_track(tracks: list[CaptionTrack]) -> CaptionTrack:
    """Pick the preferred caption track.

    Preference: manual English, any English, regional English, then the first
    track as a last resort.

    Raises:
        NoSuitableTrackError: If the track list is empty
    """
    if not tracks:
        raise NoSuitableTrackError("No suitable caption track found.")
    for rule in _RULES:
        track = next((t for t in tracks if rule(t)), None)
        if track is not None:
            return track
    return tracks[0]
