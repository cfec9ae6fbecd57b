from ..lines import split_lines
from ..models import SKIP_MARKER, DiffOp, DiffOperation, LineDiff, LineDiffType
from ..windowing import LineActionType, window_lines
from .interfaces import DiffContractError, IAnnotationService


class WindowingState:
    """Running line counters and output for a single annotation pass."""

    def __init__(self):
        self.line_in_old_text: int = 1
        self.line_in_new_text: int = 1
        self.lines: list[LineDiff] = []
        # Whether the last span seen for each side ended with a line terminator
        self.old_side_terminated: bool = True
        self.new_side_terminated: bool = True

    def advance(self, count: int) -> None:
        self.line_in_old_text += count
        self.line_in_new_text += count

    def output_equal(self, line: str) -> None:
        self.lines.append(
            LineDiff(
                kind=LineDiffType.EQUAL,
                old_line_number=self.line_in_old_text,
                new_line_number=self.line_in_new_text,
                content=line,
            )
        )
        self.advance(1)

    def output_skip(self, count: int) -> None:
        self.lines.append(LineDiff(kind=LineDiffType.SKIP, content=SKIP_MARKER))
        self.advance(count)

    def output_delete(self, line: str) -> None:
        self.lines.append(
            LineDiff(
                kind=LineDiffType.DELETE,
                old_line_number=self.line_in_old_text,
                content=line,
            )
        )
        self.line_in_old_text += 1

    def output_insert(self, line: str) -> None:
        self.lines.append(
            LineDiff(
                kind=LineDiffType.INSERT,
                new_line_number=self.line_in_new_text,
                content=line,
            )
        )
        self.line_in_new_text += 1


class AnnotationService(IAnnotationService):
    """Turns coarse diff operations into numbered line records.

    Operations are walked once, in order. Unchanged spans go through context
    windowing; inserted and deleted spans are emitted line by line. The
    returned records carry no display tag yet.
    """

    def annotate(
        self, operations: list[DiffOperation], context_size: int | None = None
    ) -> list[LineDiff]:
        """Annotate operations with old/new line numbers.

        Args:
            operations: Ordered diff operations from the diff engine
            context_size: Lines of context kept next to each change; None or
                a non-positive value keeps every unchanged line

        Returns:
            Line records in emission order

        Raises:
            DiffContractError: If an operation has an unknown kind or a span
                does not start on a line boundary
        """
        state = WindowingState()
        last_index = len(operations) - 1

        for index, operation in enumerate(operations):
            self._check_line_boundary(operation, index, state)
            diff_lines = split_lines(operation.text)

            if operation.op == DiffOp.EQUAL:
                self._output_equal_diff(
                    diff_lines,
                    state,
                    context_size,
                    is_first=index == 0,
                    is_last=index == last_index,
                )
            elif operation.op == DiffOp.DELETE:
                for line in diff_lines:
                    state.output_delete(line)
            elif operation.op == DiffOp.INSERT:
                for line in diff_lines:
                    state.output_insert(line)
            else:
                raise DiffContractError(
                    f"Unknown diff operation {operation.op!r} at index {index}",
                    service_name="AnnotationService",
                )

        return state.lines

    def _output_equal_diff(
        self,
        diff_lines: list[str],
        state: WindowingState,
        context_size: int | None,
        is_first: bool,
        is_last: bool,
    ) -> None:
        for action in window_lines(diff_lines, context_size, is_first, is_last):
            if action.action == LineActionType.EMIT:
                state.output_equal(action.content)
            elif action.action == LineActionType.ADVANCE:
                state.advance(action.count)
            elif action.action == LineActionType.SKIP:
                state.output_skip(action.count)
            else:
                raise DiffContractError(
                    f"Unknown line action {action.action!r}",
                    service_name="AnnotationService",
                )

    def _check_line_boundary(
        self, operation: DiffOperation, index: int, state: WindowingState
    ) -> None:
        if not operation.text:
            return
        touches_old = operation.op in (DiffOp.EQUAL, DiffOp.DELETE)
        touches_new = operation.op in (DiffOp.EQUAL, DiffOp.INSERT)
        if (touches_old and not state.old_side_terminated) or (
            touches_new and not state.new_side_terminated
        ):
            raise DiffContractError(
                f"Span at index {index} does not start on a line boundary",
                service_name="AnnotationService",
            )
        terminated = operation.text.endswith("\n")
        if touches_old:
            state.old_side_terminated = terminated
        if touches_new:
            state.new_side_terminated = terminated
