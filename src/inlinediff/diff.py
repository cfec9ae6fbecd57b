import difflib

from .models import DiffOp, DiffOperation


def _split_keepends(content: str) -> list[str]:
    # Only "\n" ends a line; a lone "\r" stays inside its line
    parts = content.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


class DiffGenerator:
    """
    Generates line-level diff operations between two texts.

    Uses Python's built-in difflib module over the lines of each text, so
    every span it produces starts and ends on a line boundary.
    """

    @staticmethod
    def compute_line_diff(old_content: str, new_content: str) -> list[DiffOperation]:
        """
        Compute the line diff between two content strings.

        Args:
            old_content: The original content to compare
            new_content: The new content to compare against

        Returns:
            Ordered equal/delete/insert operations; a replaced block becomes a
            delete followed by an insert
        """
        old_lines = _split_keepends(old_content)
        new_lines = _split_keepends(new_content)
        matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)

        operations: list[DiffOperation] = []
        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == "equal":
                operations.append(
                    DiffOperation(op=DiffOp.EQUAL, text="".join(old_lines[i1:i2]))
                )
                continue
            if tag in ("delete", "replace"):
                operations.append(
                    DiffOperation(op=DiffOp.DELETE, text="".join(old_lines[i1:i2]))
                )
            if tag in ("insert", "replace"):
                operations.append(
                    DiffOperation(op=DiffOp.INSERT, text="".join(new_lines[j1:j2]))
                )
        return operations
