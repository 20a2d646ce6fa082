"""Render aligned segments for display.

Unchanged text is shown as-is and inserted text is highlighted. Deleted
text is computed by the engine but never shown: the rendered output always
reads as the transformed text.
"""

import html
import re
from typing import Callable, Iterator, List, Sequence, Tuple

from humandiff.text.diff import Segment, SegmentKind

RENDER_FORMATS = ("plain", "markdown", "html")

_MARKDOWN_SPECIAL = re.compile(r"([\\`*_\[\]])")


def escape_markdown(text: str) -> str:
    """Backslash-escape characters that would otherwise start emphasis, code or links."""
    return _MARKDOWN_SPECIAL.sub(r"\\\1", text)


def _runs(segments: Sequence[Segment]) -> Iterator[Tuple[bool, str]]:
    """Yield (highlighted, text) runs with Removed segments dropped.

    Consecutive Added segments are merged into a single run.
    """
    buffer: List[str] = []
    highlighted = False
    for segment in segments:
        if segment.kind is SegmentKind.REMOVED:
            continue
        is_added = segment.kind is SegmentKind.ADDED
        if buffer and is_added != highlighted:
            yield highlighted, "".join(buffer)
            buffer = []
        highlighted = is_added
        buffer.append(segment.text)
    if buffer:
        yield highlighted, "".join(buffer)


def _render(
    segments: Sequence[Segment],
    mark: Callable[[str], str],
    escape: Callable[[str], str] = lambda text: text,
) -> str:
    parts = []
    for highlighted, text in _runs(segments):
        if not highlighted:
            parts.append(escape(text))
            continue

        # Keep surrounding whitespace outside the marker.
        core = text.strip()
        if not core:
            parts.append(escape(text))
            continue
        start = text.index(core)
        parts.append(escape(text[:start]))
        parts.append(mark(escape(core)))
        parts.append(escape(text[start + len(core):]))
    return "".join(parts)


def render_plain(segments: Sequence[Segment]) -> str:
    """Render without markers. The result equals the transformed text."""
    return _render(segments, mark=lambda text: text)


def render_markdown(segments: Sequence[Segment]) -> str:
    """Render with inserted text in bold and markdown metacharacters escaped.

    Args:
        segments: Output of compute_diff()

    Returns:
        Markdown string, e.g. "The quick **brown** fox"
    """
    return _render(segments, mark=lambda text: f"**{text}**", escape=escape_markdown)


def render_html(segments: Sequence[Segment]) -> str:
    """Render as escaped HTML with inserted text wrapped in a diff-added span.

    Args:
        segments: Output of compute_diff()

    Returns:
        HTML fragment suitable for a whitespace-preserving container
    """
    return _render(
        segments,
        mark=lambda text: f'<span class="diff-added">{text}</span>',
        escape=lambda text: html.escape(text, quote=False),
    )


def render(segments: Sequence[Segment], fmt: str = "markdown") -> str:
    """Render segments in one of RENDER_FORMATS.

    Raises:
        ValueError: If fmt is not a known format
    """
    if fmt == "plain":
        return render_plain(segments)
    elif fmt == "markdown":
        return render_markdown(segments)
    elif fmt == "html":
        return render_html(segments)
    raise ValueError(f"Unknown render format: {fmt} (expected one of {', '.join(RENDER_FORMATS)})")
