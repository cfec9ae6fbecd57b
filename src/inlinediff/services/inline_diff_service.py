import logging
from typing import Any

from ..config import Config
from ..models import (
    DiffOp,
    DiffOperation,
    LineDiff,
    LineDiffResult,
    LineSelectEvent,
)
from .interfaces import (
    DiffContractError,
    DiffEngineError,
    IAnnotationService,
    IDiffEngine,
    IInlineDiffService,
    InlineDiffError,
)

logger = logging.getLogger(__name__)


def normalize_text(value: Any) -> str:
    """Convert a diff input to text.

    None becomes the empty string, strings pass through unchanged and any
    other scalar (number, boolean) is converted with ``str``.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _to_operation(operation: Any) -> DiffOperation:
    # Engines may hand back (op, text) pairs instead of models
    if isinstance(operation, (tuple, list)):
        op, text = operation
        return DiffOperation(op=op, text=text)
    return DiffOperation.model_validate(operation, from_attributes=True)


class InlineDiffService(IInlineDiffService):
    """Computes inline line diffs.

    This service normalizes inputs, runs the diff engine, annotates the
    resulting operations with line numbers and attaches display tags.
    """

    def __init__(
        self,
        engine: IDiffEngine,
        annotation: IAnnotationService,
        config: Config,
    ):
        """Initialize the inline diff service.

        Args:
            engine: Diff engine producing line-aligned operations
            annotation: Annotation service turning operations into lines
            config: Configuration with default context size and display tags
        """
        self.engine = engine
        self.annotation = annotation
        self.config = config

    def compute(
        self, old_text: Any, new_text: Any, context_size: int | None = None
    ) -> LineDiffResult:
        """Compute the inline diff between two texts.

        Args:
            old_text: Original text, a scalar to stringify, or None
            new_text: New text, a scalar to stringify, or None
            context_size: Lines of context on each side of a change; falls
                back to the configured context size when None

        Returns:
            Result with the content-equal flag and the tagged lines

        Raises:
            DiffEngineError: If the diff engine fails or breaks its contract
            InlineDiffError: If annotation fails for any other reason
        """
        old_content = normalize_text(old_text)
        new_content = normalize_text(new_text)
        if context_size is None:
            context_size = self.config.context_size

        if old_content == new_content:
            logger.debug("Texts are identical, skipping diff engine")
            return LineDiffResult(is_content_equal=True)

        operations = self._compute_operations(old_content, new_content)
        if len(operations) == 1 and operations[0].op == DiffOp.EQUAL:
            return LineDiffResult(is_content_equal=True)

        try:
            lines = self.annotation.annotate(operations, context_size)
        except DiffEngineError:
            raise
        except Exception as e:
            raise InlineDiffError(
                f"Failed to annotate diff operations: {str(e)}",
                service_name="InlineDiffService",
            ) from e

        logger.debug(
            f"Computed {len(lines)} lines from {len(operations)} operations "
            f"(context size {context_size})"
        )
        return LineDiffResult(is_content_equal=False, lines=self._tag_lines(lines))

    def select_line(self, index: int, line: LineDiff) -> LineSelectEvent:
        """Describe the selection of a computed line.

        Args:
            index: Position of the line in the computed sequence
            line: The selected line

        Returns:
            Event carrying the line position, kind, numbers and content
        """
        return LineSelectEvent(
            index=index,
            kind=line.kind,
            old_line_number=line.old_line_number,
            new_line_number=line.new_line_number,
            content=line.content,
        )

    def _compute_operations(
        self, old_content: str, new_content: str
    ) -> list[DiffOperation]:
        try:
            raw_operations = self.engine.compute_line_diff(old_content, new_content)
        except Exception as e:
            raise DiffEngineError(
                f"Diff engine failed: {str(e)}",
                service_name="InlineDiffService",
            ) from e

        try:
            operations = [_to_operation(operation) for operation in raw_operations]
        except (ValueError, TypeError) as e:
            raise DiffContractError(
                f"Diff engine returned an invalid operation: {str(e)}",
                service_name="InlineDiffService",
            ) from e

        if self.config.validate_operations:
            self._check_rebuilds(operations, old_content, new_content)
        return operations

    def _check_rebuilds(
        self, operations: list[DiffOperation], old_content: str, new_content: str
    ) -> None:
        old_parts = [op.text for op in operations if op.op != DiffOp.INSERT]
        new_parts = [op.text for op in operations if op.op != DiffOp.DELETE]
        if "".join(old_parts) != old_content:
            raise DiffContractError(
                "Diff operations do not rebuild the old text",
                service_name="InlineDiffService",
            )
        if "".join(new_parts) != new_content:
            raise DiffContractError(
                "Diff operations do not rebuild the new text",
                service_name="InlineDiffService",
            )

    def _tag_lines(self, lines: list[LineDiff]) -> list[LineDiff]:
        tags = self.config.display_tags
        return [
            line.model_copy(update={"display_tag": tags[line.kind]}) for line in lines
        ]
