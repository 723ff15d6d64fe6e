"""Terminal rendering of resolved segments and span listings."""

from __future__ import annotations

from typing import Iterable, Sequence

from .highlight import Segment
from .models import Span

HIGHLIGHT_MARKERS = ("[", "]")
ACTIVE_MARKERS = ("{", "}")

ANSI_RESET = "\x1b[0m"
ANSI_HIGHLIGHT = "\x1b[30;43m"  # black on yellow
ANSI_ACTIVE = "\x1b[30;48;5;214m"  # black on orange

EMPTY_LIST_MESSAGE = "No annotations yet for this trace."


def render_segments(segments: Iterable[Segment], *, color: bool = False) -> str:
    """Paint segments as plain, highlighted or active text.

    Without color, highlighted runs are wrapped in ``[...]`` and active runs in
    ``{...}``.
    """

    parts: list[str] = []
    for segment in segments:
        if not segment.text:
            continue
        if not segment.highlighted:
            parts.append(segment.text)
        elif color:
            style = ANSI_ACTIVE if segment.active else ANSI_HIGHLIGHT
            parts.append(f"{style}{segment.text}{ANSI_RESET}")
        else:
            opening, closing = ACTIVE_MARKERS if segment.active else HIGHLIGHT_MARKERS
            parts.append(f"{opening}{segment.text}{closing}")
    return "".join(parts)


def render_span_detail(span: Span) -> str:
    return f"Behavior: {span.label}\nScore: {span.score}"


def render_span_list(spans: Sequence[Span], active_id: int | None = None) -> str:
    lines = [f"Current Annotations ({len(spans)})"]
    if not spans:
        lines.append(EMPTY_LIST_MESSAGE)
        return "\n".join(lines)

    for span in spans:
        marker = "*" if span.span_id == active_id else " "
        lines.append(f"{marker} #{span.span_id} \"{span.text}\" | {span.label} | score {span.score}")
    return "\n".join(lines)


__all__ = ["render_segments", "render_span_detail", "render_span_list", "EMPTY_LIST_MESSAGE"]
