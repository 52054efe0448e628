from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Sequence

_BLANK_RUN_RE = re.compile(r"\n{3,}")
_NON_WORD_RE = re.compile(r"[^\w\s]")

CHORUS_MARKERS = ("chorus", "hook", "refrain")
_MIN_REPEATED_LINE_LEN = 10


@dataclass(frozen=True, slots=True)
class LyricsStats:
    cleaned: str
    lines: tuple[str, ...]
    word_count: int
    verse_count: int
    has_chorus: bool

    @property
    def line_count(self) -> int:
        return len(self.lines)


def normalize_lyrics(text: str) -> str:
    """
    - CRLF / CR -> LF
    - every line trimmed
    - two or more blank lines in a row -> one blank line
    - whole text trimmed

    Lines are trimmed before blank runs are collapsed, so whitespace-only
    lines count as blank and a second pass changes nothing.
    """
    unified = text.replace("\r\n", "\n").replace("\r", "\n")
    trimmed = "\n".join(line.strip() for line in unified.split("\n"))
    return _BLANK_RUN_RE.sub("\n\n", trimmed).strip()


def split_lines(text: str) -> list[str]:
    return [ln.strip() for ln in text.split("\n") if ln.strip()]


def count_words(text: str) -> int:
    # punctuation becomes a separator: "don't" counts as two tokens
    return len(_NON_WORD_RE.sub(" ", text).split())


def count_verses(lines: Sequence[str]) -> int:
    """Rough estimate of one verse per four lines, not a structural parse."""
    if not lines:
        return 0
    return len(lines) // 4 + 1


def detect_chorus(text: str) -> bool:
    """
    Heuristic: an explicit chorus/hook/refrain marker, or any line longer than
    ten characters that shows up more than once.
    """
    lower = text.lower()
    if any(marker in lower for marker in CHORUS_MARKERS):
        return True

    seen: set[str] = set()
    for line in text.split("\n"):
        trimmed = line.strip()
        if len(trimmed) <= _MIN_REPEATED_LINE_LEN:
            continue
        if trimmed in seen:
            return True
        seen.add(trimmed)
    return False


def analyze_lyrics(raw: str) -> LyricsStats:
    cleaned = normalize_lyrics(raw)
    lines = split_lines(cleaned)
    return LyricsStats(
        cleaned=cleaned,
        lines=tuple(lines),
        word_count=count_words(cleaned),
        verse_count=count_verses(lines),
        has_chorus=detect_chorus(cleaned),
    )
