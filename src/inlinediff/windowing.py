"""Context windowing for unchanged spans.

An unchanged span that is longer than the context size is cut down so that
only the lines next to a change stay visible:

- the first span of a document keeps its last ``context_size`` lines;
- the last span of a document keeps its first ``context_size`` lines;
- an interior span longer than ``2 * context_size`` keeps both ends and
  replaces the middle with a single skip marker.

A document made of a single unchanged span never reaches this module; it is
reported as content-equal before any windowing happens.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class LineActionType(str, Enum):
    EMIT = "emit"
    ADVANCE = "advance"
    SKIP = "skip"


class LineAction(BaseModel):
    """One step the annotator performs for an unchanged span.

    ``emit`` outputs ``content`` as an equal line. ``advance`` moves both line
    counters by ``count`` without output. ``skip`` outputs one skip marker and
    moves both counters by ``count``.
    """

    action: LineActionType
    content: str = ""
    count: int = 1

    model_config = ConfigDict(frozen=True)


def _emit(lines: list[str]) -> list[LineAction]:
    return [LineAction(action=LineActionType.EMIT, content=line) for line in lines]


def is_windowing_enabled(context_size: int | None) -> bool:
    """Check whether a context size asks for truncation.

    Zero and negative sizes disable windowing just like None.
    """
    return (
        isinstance(context_size, int)
        and not isinstance(context_size, bool)
        and context_size > 0
    )


def window_lines(
    lines: list[str],
    context_size: int | None,
    is_first: bool,
    is_last: bool,
) -> list[LineAction]:
    """Decide which lines of an unchanged span are shown.

    Args:
        lines: Logical lines of the unchanged span
        context_size: Lines of context to keep next to each change
        is_first: Whether the span is the first operation of the diff
        is_last: Whether the span is the last operation of the diff

    Returns:
        Actions to apply, in order
    """
    if not is_windowing_enabled(context_size) or len(lines) <= context_size:
        return _emit(lines)

    if is_first:
        # Leading lines are dropped but still counted
        dropped = len(lines) - context_size
        return [
            LineAction(action=LineActionType.ADVANCE, count=dropped),
            *_emit(lines[dropped:]),
        ]

    if is_last:
        return _emit(lines[:context_size])

    if len(lines) > 2 * context_size:
        skipped = len(lines) - 2 * context_size
        return [
            *_emit(lines[:context_size]),
            LineAction(action=LineActionType.SKIP, count=skipped),
            *_emit(lines[-context_size:]),
        ]

    return _emit(lines)
