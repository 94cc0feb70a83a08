"""Timed-text (caption XML) to transcript conversion.

Timed-text documents look like:

    <transcript>
      <text start="0.5" dur="2.1">Hello &amp;amp; welcome</text>
      ...
    </transcript>

The format is loosely specified, so parsing is regex based and never fails:
if no <text> entries are found, a degraded tag-stripped excerpt is returned.
"""

import re

from captrix.logging import logger
from captrix.models import TimedUtterance

# <text ... start="12.3" ...>content</text>, attributes in any order
_TEXT_RE = re.compile(r'<text[^>]*start="([\d.]+)"[^>]*>(.*?)</text>', re.DOTALL)
_START_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_TAG_RE = re.compile(r"<[^>]+>")
_ANY_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")

DEGRADED_LIMIT = 1000


def clean_text(raw: str) -> str:
    """Strip nested tags, decode the basic entities and normalize whitespace."""
    text = _TAG_RE.sub("", raw)
    text = text.replace("&amp;", "&").replace("&#39;", "'").replace("&quot;", '"')
    text = _WS_RE.sub(" ", text).strip()
    return text.replace("&lt;", "<").replace("&gt;", ">")


def parse_utterances(xml: str) -> list[TimedUtterance]:
    """Parse timed-text entries in document order, skipping empty ones."""
    utterances: list[TimedUtterance] = []
    for match in _TEXT_RE.finditer(xml):
        # Leading number only, so start="1.2.3" reads as 1.2
        start_match = _START_RE.match(match.group(1))
        if not start_match:
            continue
        start = float(start_match.group())
        text = clean_text(match.group(2))
        if text:
            utterances.append(TimedUtterance(start=start, text=text))
    return utterances


def degraded_transcript(xml: str) -> str:
    """Tag-stripped excerpt used when no timed-text entries could be parsed."""
    return _ANY_TAG_RE.sub(" ", xml)[:DEGRADED_LIMIT]


def decode_timed_text(xml: str) -> str:
    """Convert a timed-text document to "[MM:SS] text" lines.

    Args:
        xml: Raw timed-text document

    Returns:
        Newline-joined transcript, or a degraded excerpt of at most
        DEGRADED_LIMIT characters if the document has no recognizable entries.
    """
    utterances = parse_utterances(xml)
    if utterances:
        return "\n".join(u.render() for u in utterances)

    # Entries that all cleaned to empty text give an empty transcript, not the excerpt
    if _TEXT_RE.search(xml):
        return ""

    logger.warning("No timed-text entries found, returning degraded transcript")
    return degraded_transcript(xml)
