"""
Text Segmenter & Keyword Matcher

Splits resume text into line segments and scans it for configured
vocabulary terms. Every function here is pure: same text in, same result out.
"""

import re
import logging
from functools import lru_cache
from typing import Dict, Iterable, List, Pattern

from .config import BULLET_MARKERS

logger = logging.getLogger(__name__)

_MARKERS = "".join(re.escape(m) for m in BULLET_MARKERS)

# "...2015-2020. - Led a team" -> two segments
INLINE_BULLET_RX = re.compile(rf"(?<=[.;:!?])\s+(?=[{_MARKERS}]\s)")
BULLET_RX = re.compile(rf"^\s*[{_MARKERS}]\s*")


@lru_cache(maxsize=512)
def keyword_pattern(keyword: str) -> Pattern[str]:
    """Whole-word, case-insensitive pattern for a vocabulary term."""
    return re.compile(rf"(?<!\w){re.escape(keyword.strip())}(?!\w)", re.IGNORECASE)


def contains_keyword(text: str, keyword: str) -> bool:
    if not text or not keyword.strip():
        return False
    return keyword_pattern(keyword).search(text) is not None


def match_keywords(text: str, vocabulary: Iterable[str]) -> Dict[str, bool]:
    """
    Report, for each keyword, whether it occurs in the text.

    Each keyword is matched independently as a whole word, ignoring case.
    Empty text yields False for every keyword.

    Args:
        text: Raw text to scan
        vocabulary: Keyword strings, in the order they should be reported

    Returns:
        Ordered mapping of keyword -> found
    """
    return {keyword: contains_keyword(text, keyword) for keyword in vocabulary}


def find_keywords(text: str, vocabulary: Iterable[str]) -> List[str]:
    """Keywords from the vocabulary that occur in the text, in vocabulary order."""
    return [keyword for keyword, found in match_keywords(text, vocabulary).items() if found]


def contains_any(text: str, needles: Iterable[str]) -> bool:
    """Plain case-insensitive substring test against any needle."""
    lowered = (text or "").lower()
    return any(needle.lower() in lowered for needle in needles)


def split_lines(text: str) -> List[str]:
    """
    Split text into line segments.

    Newlines always separate segments. A bullet marker that follows
    sentence-ending punctuation on the same line also starts a new segment.
    Blank segments are dropped.
    """
    segments = []
    for line in (text or "").splitlines():
        for part in INLINE_BULLET_RX.split(line):
            if part.strip():
                segments.append(part)
    return segments


def is_bullet(line: str) -> bool:
    return bool(BULLET_RX.match(line))


def strip_bullet(line: str) -> str:
    return BULLET_RX.sub("", line, count=1).strip()


def tokenize(text: str) -> List[str]:
    """Lower-cased whitespace-delimited words."""
    return (text or "").lower().split()
