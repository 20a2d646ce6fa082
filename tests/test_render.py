import pytest

from humandiff.text.diff import Segment, SegmentKind, compute_diff
from humandiff.text.render import render, render_html, render_markdown, render_plain


def test_markdown_highlights_insertion() -> None:
    segments = compute_diff("The quick fox", "The quick brown fox")

    assert render_markdown(segments) == "The quick **brown** fox"


def test_removed_text_is_not_rendered() -> None:
    segments = compute_diff("The quick brown fox", "The quick fox")

    assert any(segment.kind is SegmentKind.REMOVED for segment in segments)
    assert render_markdown(segments) == "The quick fox"
    assert render_html(segments) == "The quick fox"


def test_substitution_renders_only_new_words() -> None:
    segments = compute_diff("alpha beta", "ALPHA BETA")

    assert render_markdown(segments) == "**ALPHA** **BETA**"


def test_consecutive_additions_merge_into_one_run() -> None:
    segments = [
        Segment(SegmentKind.SAME, "start "),
        Segment(SegmentKind.ADDED, "very"),
        Segment(SegmentKind.ADDED, " "),
        Segment(SegmentKind.REMOVED, "old"),
        Segment(SegmentKind.ADDED, "new"),
        Segment(SegmentKind.ADDED, " "),
        Segment(SegmentKind.SAME, "end"),
    ]

    assert render_markdown(segments) == "start **very new** end"


def test_two_word_insertion_beyond_window_renders_as_replacement() -> None:
    segments = compute_diff("start end", "start very new end")

    assert render_markdown(segments) == "start **very new end**"


def test_whitespace_only_addition_is_unmarked() -> None:
    segments = compute_diff("a b", "a  b")

    assert render_markdown(segments) == "a  b"


def test_markdown_escapes_metacharacters() -> None:
    segments = [
        Segment(SegmentKind.SAME, "use snake_case "),
        Segment(SegmentKind.ADDED, "2*3"),
        Segment(SegmentKind.SAME, " [x]"),
    ]

    assert render_markdown(segments) == r"use snake\_case **2\*3** \[x\]"


def test_html_escapes_text() -> None:
    segments = compute_diff("x < y", "x < y & z")

    html = render_html(segments)

    assert html.startswith("x &lt; y")
    assert '<span class="diff-added">&amp; z</span>' in html


@pytest.mark.parametrize(
    "original, transformed",
    [
        ("The quick fox", "The quick brown fox"),
        ("one two three", "three two one"),
        ("", "fresh text"),
        ("  padded  ", "padded"),
    ],
)
def test_plain_render_equals_transformed_text(original: str, transformed: str) -> None:
    assert render_plain(compute_diff(original, transformed)) == transformed


def test_render_dispatches_by_format() -> None:
    segments = [Segment(SegmentKind.SAME, "a "), Segment(SegmentKind.ADDED, "b")]

    assert render(segments, "plain") == "a b"
    assert render(segments, "markdown") == "a **b**"
    assert render(segments, "html") == 'a <span class="diff-added">b</span>'
    with pytest.raises(ValueError):
        render(segments, "pdf")
