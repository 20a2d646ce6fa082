"""Humandiff: word-level comparison of an original text and its rewritten version."""

from typing import List

from humandiff.text.diff import LOOKAHEAD_WINDOW, Segment, SegmentKind, compute_diff
from humandiff.text.render import render_markdown

__version__ = "0.1.0"


def compare(original: str, transformed: str, window: int = LOOKAHEAD_WINDOW) -> List[Segment]:
    """Canonical entry point for comparing a text with its transformed version.

    If either text is empty there is nothing to compare yet, so an empty
    segment list is returned without calling the alignment engine. Otherwise
    the texts are tokenized and aligned by compute_diff().

    Args:
        original: The text before transformation
        transformed: The text after transformation
        window: Lookahead window for the alignment engine

    Returns:
        Segments in presentation order, or [] if either text is empty
    """
    if not original or not transformed:
        return []
    return compute_diff(original, transformed, window=window)


__all__ = [
    "LOOKAHEAD_WINDOW",
    "Segment",
    "SegmentKind",
    "compare",
    "compute_diff",
    "render_markdown",
]
