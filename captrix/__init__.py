"""captrix - YouTube caption transcripts through proxy routes."""

from captrix.errors import ExtractionFailedError, InvalidVideoIdError
from captrix.extractor import TranscriptExtractor, extract_transcript
from captrix.models import CaptionTrack, TrackKind, extract_video_id

try:
    from captrix._version import __version__
except ImportError:
    __version__ = "0.0.0.dev0"

__all__ = [
    "CaptionTrack",
    "ExtractionFailedError",
    "InvalidVideoIdError",
    "TrackKind",
    "TranscriptExtractor",
    "extract_transcript",
    "extract_video_id",
    "__version__",
]
