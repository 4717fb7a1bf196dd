"""
Title cleaning: strip quality/codec/source noise and scene punctuation.

Token removal is substring based and case-insensitive, so "Bunny.1080P" and
"Bunny1080p" both lose the resolution marker. Removal is repeated until the
text stops changing; otherwise removing one token could join its neighbours
into another ("7" + "1080p" + "20p" -> "720p") and a second call would
clean further.
"""

import re

from vidkit.utils.constants import EPISODE_QUALITY_TERMS, TITLE_NOISE_TOKENS, TITLE_PUNCTUATION

_NOISE_RE = re.compile("|".join(re.escape(t) for t in TITLE_NOISE_TOKENS), re.IGNORECASE)
_QUALITY_RE = re.compile("|".join(re.escape(t) for t in EPISODE_QUALITY_TERMS), re.IGNORECASE)
_PUNCT_TABLE = str.maketrans({c: " " for c in TITLE_PUNCTUATION})
_WHITESPACE_RE = re.compile(r"\s+")


def _remove_all(pattern: re.Pattern, text: str) -> str:
    while True:
        stripped = pattern.sub("", text)
        if stripped == text:
            return stripped
        text = stripped


def clean_title(raw: str) -> str:
    """
    Clean a candidate title.

    Examples:
      "Big.Buck.Bunny.1080p.x264" -> "Big Buck Bunny"
      "Big Buck Bunny   [1080p x264]" -> "Big Buck Bunny"
      "Breaking_Bad_" -> "Breaking Bad"
    """
    title = _remove_all(_NOISE_RE, raw)
    title = title.translate(_PUNCT_TABLE)
    return _WHITESPACE_RE.sub(" ", title).strip()


def strip_quality_terms(text: str) -> str:
    """Remove resolution/codec/source terms (HEVC included) without other cleanup."""
    return _remove_all(_QUALITY_RE, text)
