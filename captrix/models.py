"""Data models for captrix."""

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

import yaml  # type: ignore[import-untyped]

from captrix.errors import InvalidVideoIdError

VIDEO_ID_LENGTH = 11

# Markers that precede the video ID in the known URL shapes:
# youtu.be/ID, /v/ID, /u/x/ID, /embed/ID, /shorts/ID, /live/ID, watch?v=ID, &v=ID
_VIDEO_ID_RE = re.compile(
    r"(?:youtu\.be/|v/|u/\w/|embed/|shorts/|live/|watch\?v=|&v=)"
    r"([A-Za-z0-9_-]{11})(?![A-Za-z0-9_-])"
)
_BARE_ID_RE = re.compile(r"[A-Za-z0-9_-]{11}")


def extract_video_id(url_or_id: str) -> str:
    """Extract and validate a video ID from a URL or bare ID.

    Args:
        url_or_id: YouTube video URL (short-link, watch, embed, ...) or video ID

    Returns:
        The 11-character video ID

    Raises:
        InvalidVideoIdError: If no 11-character ID follows a recognized marker
    """
    url_or_id = url_or_id.strip()
    if not url_or_id:
        raise InvalidVideoIdError("Empty video URL/ID")

    if _BARE_ID_RE.fullmatch(url_or_id):
        return url_or_id

    match = _VIDEO_ID_RE.search(url_or_id)
    if not match:
        raise InvalidVideoIdError(f"No video ID found in: {url_or_id}")
    return match.group(1)


def watch_url(video_id: str) -> str:
    """Canonical watch page URL for a video ID."""
    return f"https://www.youtube.com/watch?v={video_id}"


class TrackKind(str, Enum):
    """Authorship of a caption track."""

    STANDARD = "standard"
    AUTO_GENERATED = "auto-generated"


@dataclass
class CaptionTrack:
    """One caption stream available for a video."""

    language_code: str
    kind: TrackKind
    source_url: str  # Raw timed-text document, fetched through a route
    name: str = ""

    @property
    def is_auto_generated(self) -> bool:
        return self.kind is TrackKind.AUTO_GENERATED

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CaptionTrack":
        """Deserialize from an embedded player-response track record."""
        return cls(
            language_code=data.get("languageCode") or "",
            kind=TrackKind.AUTO_GENERATED if data.get("kind") == "asr" else TrackKind.STANDARD,
            source_url=data["baseUrl"],
            name=_track_name(data.get("name")),
        )

    def to_dict(self) -> dict[str, Any]:
        d = {"language": self.language_code, "kind": self.kind.value}
        if self.name:
            d["name"] = self.name
        return d


def _track_name(name: Any) -> str:
    """Flatten {"simpleText": ...} or {"runs": [{"text": ...}]} display names."""
    if isinstance(name, str):
        return name
    if not isinstance(name, dict):
        return ""
    if "simpleText" in name:
        return str(name["simpleText"])
    runs = name.get("runs") or []
    return "".join(str(r.get("text", "")) for r in runs if isinstance(r, dict))


@dataclass
class TimedUtterance:
    """A single caption entry with its start offset in seconds."""

    start: float
    text: str

    def render(self) -> str:
        return f"{format_timestamp(self.start)} {self.text}"


def format_timestamp(seconds: float) -> str:
    """Format an offset as [MM:SS] (minutes are not wrapped into hours).

    Args:
        seconds: Offset in seconds

    Returns:
        Formatted string like "[01:05]"
    """
    if seconds < 0:
        seconds = 0
    minutes, secs = divmod(int(seconds), 60)
    return f"[{minutes:02d}:{secs:02d}]"


@dataclass
class TranscriptRecord:
    """A generated transcript as handed to storage/presentation."""

    video_id: str
    source: str  # Original user input
    content: str
    generated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    route: str | None = None
    language: str | None = None
    title: str = ""

    @property
    def word_count(self) -> int:
        return len(self.content.split())

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON/YAML output."""
        d: dict[str, Any] = {
            "video_id": self.video_id,
            "title": self.title or f"Transcript: {self.video_id}",
            "source": self.source,
            "generated_at": self.generated_at.isoformat(),
            "word_count": self.word_count,
        }
        if self.route:
            d["route"] = self.route
        if self.language:
            d["language"] = self.language
        d["content"] = self.content
        return d

    def to_markdown(self) -> str:
        """Markdown document with YAML frontmatter followed by the transcript."""
        frontmatter = self.to_dict()
        del frontmatter["content"]
        yaml_str = yaml.dump(frontmatter, default_flow_style=False, allow_unicode=True, sort_keys=False)
        return f"---\n{yaml_str}---\n\n{self.content}\n"


DEMO_TRANSCRIPT = """\
[00:00] This is a demo transcript generated for demonstration purposes.
[00:05] It appears that the direct connection to YouTube was blocked by network restrictions.
[00:10] In a real deployment, this request would be routed through a dedicated backend server.
[00:15] However, you can still try out the rest of the workflow with this sample.
[00:20] Saved transcripts keep their source, generation time, and word count.
[00:25] Run the transcript command again later, or configure additional routes."""


def demo_record(source: str = "") -> TranscriptRecord:
    """Canned substitute transcript offered when extraction fails."""
    return TranscriptRecord(
        video_id="demo",
        source=source or "https://youtube.com/demo",
        content=DEMO_TRANSCRIPT,
        title="Demo Transcript (Connection Blocked)",
    )
