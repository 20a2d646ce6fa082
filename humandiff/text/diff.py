"""Word-level alignment of an original text against its transformed version.

The engine walks both token streams with two cursors and classifies every
token as unchanged, inserted or deleted. When the tokens under the cursors
disagree it looks ahead a bounded number of tokens, first in the transformed
stream and then in the original stream, and falls back to a one-for-one
substitution when neither side has a nearby match.

This is a greedy heuristic tuned for readable highlighting of short and
medium natural-language texts. It does not produce minimal edit scripts.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Sequence

from humandiff.text.tokenizer import is_whitespace_token, tokenize

# Maximum forward distance searched on either side when tokens disagree.
LOOKAHEAD_WINDOW = 3


class SegmentKind(str, Enum):
    """Classification of a token in the aligned output."""

    SAME = "same"
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True)
class Segment:
    """A single classified token, in presentation order."""

    kind: SegmentKind
    text: str

    def to_dict(self) -> Dict[str, str]:
        """Convert segment to dictionary."""
        return {"type": self.kind.value, "text": self.text}


@dataclass
class DiffStats:
    """Token and word counts for an aligned segment list."""

    same_tokens: int = 0
    added_tokens: int = 0
    removed_tokens: int = 0
    same_words: int = 0
    added_words: int = 0
    removed_words: int = 0

    @property
    def change_ratio(self) -> float:
        """Share of words in either text that were added or removed."""
        total = self.same_words * 2 + self.added_words + self.removed_words
        if total == 0:
            return 0.0
        return (self.added_words + self.removed_words) / total

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "same_tokens": self.same_tokens,
            "added_tokens": self.added_tokens,
            "removed_tokens": self.removed_tokens,
            "same_words": self.same_words,
            "added_words": self.added_words,
            "removed_words": self.removed_words,
            "change_ratio": self.change_ratio,
        }


def _find_ahead(needle: str, tokens: Sequence[str], start: int, window: int) -> int:
    """Return the smallest k in [1, window] with tokens[start + k] == needle, or 0."""
    for k in range(1, window + 1):
        if start + k >= len(tokens):
            break
        if tokens[start + k] == needle:
            return k
    return 0


def align(
    original: Sequence[str],
    transformed: Sequence[str],
    window: int = LOOKAHEAD_WINDOW,
) -> List[Segment]:
    """Align two token sequences into an ordered list of segments.

    Args:
        original: Tokens of the original text
        transformed: Tokens of the transformed text
        window: Maximum lookahead distance on either side

    Returns:
        Segments in presentation order. Same and Removed segments rebuild the
        original, Same and Added segments rebuild the transformed text.

    Raises:
        ValueError: If window is negative
    """
    if window < 0:
        raise ValueError(f"window must be non-negative, got {window}")

    m = len(original)
    n = len(transformed)
    segments: List[Segment] = []

    i = 0
    j = 0
    while i < m or j < n:
        if i >= m:
            segments.append(Segment(SegmentKind.ADDED, transformed[j]))
            j += 1
        elif j >= n:
            segments.append(Segment(SegmentKind.REMOVED, original[i]))
            i += 1
        elif original[i] == transformed[j]:
            segments.append(Segment(SegmentKind.SAME, original[i]))
            i += 1
            j += 1
        else:
            # Insertions are tried before deletions.
            k = _find_ahead(original[i], transformed, j, window)
            if k:
                for token in transformed[j:j + k]:
                    segments.append(Segment(SegmentKind.ADDED, token))
                j += k
                continue

            k = _find_ahead(transformed[j], original, i, window)
            if k:
                for token in original[i:i + k]:
                    segments.append(Segment(SegmentKind.REMOVED, token))
                i += k
                continue

            segments.append(Segment(SegmentKind.REMOVED, original[i]))
            segments.append(Segment(SegmentKind.ADDED, transformed[j]))
            i += 1
            j += 1

    return segments


def compute_diff(
    original: str,
    transformed: str,
    window: int = LOOKAHEAD_WINDOW,
) -> List[Segment]:
    """Tokenize both texts and align them.

    Empty inputs are passed through, so an empty original yields only Added
    segments and an empty transformed text yields only Removed segments.

    Args:
        original: The original text
        transformed: The transformed text
        window: Maximum lookahead distance on either side

    Returns:
        Segments in presentation order
    """
    return align(tokenize(original), tokenize(transformed), window=window)


def original_text(segments: Sequence[Segment]) -> str:
    """Rebuild the original text from Same and Removed segments."""
    return "".join(s.text for s in segments if s.kind is not SegmentKind.ADDED)


def transformed_text(segments: Sequence[Segment]) -> str:
    """Rebuild the transformed text from Same and Added segments."""
    return "".join(s.text for s in segments if s.kind is not SegmentKind.REMOVED)


def summarize(segments: Sequence[Segment]) -> DiffStats:
    """Count tokens and words per segment kind.

    Whitespace runs and empty boundary tokens count as tokens but not as words.

    Args:
        segments: Output of align() or compute_diff()

    Returns:
        DiffStats with per-kind counts
    """
    stats = DiffStats()
    for segment in segments:
        is_word = bool(segment.text) and not is_whitespace_token(segment.text)
        if segment.kind is SegmentKind.SAME:
            stats.same_tokens += 1
            stats.same_words += is_word
        elif segment.kind is SegmentKind.ADDED:
            stats.added_tokens += 1
            stats.added_words += is_word
        else:
            stats.removed_tokens += 1
            stats.removed_words += is_word
    return stats
