import re

_LINE_TERMINATOR = re.compile(r"\r?\n")


def split_lines(span: str) -> list[str]:
    """Split a diff span into its logical lines.

    A span that ends with a line terminator would leave an empty string after
    the split; that trailing element is dropped so ``"a\\n"`` is one line.

    Args:
        span: Text of a single diff operation

    Returns:
        Lines of the span without their terminators
    """
    lines = _LINE_TERMINATOR.split(span)
    if not lines[-1]:
        lines.pop()
    return lines
