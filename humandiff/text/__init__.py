"""Tokenization, alignment and rendering of text comparisons."""

from humandiff.text.diff import (
    LOOKAHEAD_WINDOW,
    DiffStats,
    Segment,
    SegmentKind,
    align,
    compute_diff,
    summarize,
)
from humandiff.text.tokenizer import tokenize

__all__ = [
    "LOOKAHEAD_WINDOW",
    "DiffStats",
    "Segment",
    "SegmentKind",
    "align",
    "compute_diff",
    "summarize",
    "tokenize",
]
