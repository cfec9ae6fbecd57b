from rich.table import Table
from rich.text import Text

from .config import DEFAULT_DISPLAY_TAGS
from .models import LineDiff, LineDiffResult, LineDiffType

DEFAULT_TAG_STYLES: dict[str, str] = {
    DEFAULT_DISPLAY_TAGS[LineDiffType.EQUAL]: "",
    DEFAULT_DISPLAY_TAGS[LineDiffType.INSERT]: "green",
    DEFAULT_DISPLAY_TAGS[LineDiffType.DELETE]: "red",
}

_SIGNS = {
    LineDiffType.EQUAL: " ",
    LineDiffType.INSERT: "+",
    LineDiffType.DELETE: "-",
    LineDiffType.SKIP: " ",
}


def _number(value: int | None) -> str:
    return "" if value is None else str(value)


def _style(line: LineDiff, tag_styles: dict[str, str]) -> str:
    if line.is_skip:
        return "cyan"
    return tag_styles.get(line.display_tag, "")


def render_table(
    result: LineDiffResult, tag_styles: dict[str, str] | None = None
) -> Table:
    """
    Render computed lines as a rich table.

    Args:
        result: Computed inline diff
        tag_styles: Mapping from display tag to rich style

    Returns:
        Table with old number, new number, sign and content columns
    """
    tag_styles = tag_styles or DEFAULT_TAG_STYLES
    table = Table(show_header=True, box=None, pad_edge=False)
    table.add_column("Old", justify="right", style="dim")
    table.add_column("New", justify="right", style="dim")
    table.add_column("", width=1)
    table.add_column("Line", overflow="fold")

    for line in result.lines:
        style = _style(line, tag_styles)
        table.add_row(
            _number(line.old_line_number),
            _number(line.new_line_number),
            Text(_SIGNS[line.kind], style=style),
            Text(line.content, style=style),
        )
    return table


def render_text(
    result: LineDiffResult, tag_styles: dict[str, str] | None = None
) -> Text:
    """
    Render computed lines as rich Text with a line number gutter.

    Args:
        result: Computed inline diff
        tag_styles: Mapping from display tag to rich style

    Returns:
        Rich Text object with one styled row per line
    """
    tag_styles = tag_styles or DEFAULT_TAG_STYLES
    width = max(
        (
            len(_number(number))
            for line in result.lines
            for number in (line.old_line_number, line.new_line_number)
        ),
        default=1,
    )

    diff_text = Text()
    for line in result.lines:
        gutter = (
            f"{_number(line.old_line_number):>{width}} "
            f"{_number(line.new_line_number):>{width}} "
        )
        diff_text.append(gutter, style="dim")
        diff_text.append(
            f"{_SIGNS[line.kind]} {line.content}\n", style=_style(line, tag_styles)
        )
    return diff_text
