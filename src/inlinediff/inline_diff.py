import logging
from typing import Any

from .config import Config
from .models import LineDiff, LineDiffResult, LineSelectEvent
from .services import ServiceFactory
from .services.interfaces import IDiffEngine, ILineSelectListener

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class InlineDiff:
    """Keeps an inline diff up to date with its inputs.

    This is the main entry point for the inline diff system. Changing either
    text or the context size recomputes the diff in full, and selecting a line
    notifies every registered listener.
    """

    def __init__(
        self,
        old_text: Any = None,
        new_text: Any = None,
        line_context_size: int | None = None,
        config: Config | None = None,
        engine: IDiffEngine | None = None,
    ):
        """
        Initialize the inline diff and compute it once.

        Args:
            old_text: Original text, a scalar to stringify, or None
            new_text: New text, a scalar to stringify, or None
            line_context_size: Lines of context either side of a change;
                defaults to the configured context size
            config: Configuration object (optional, creates default if not provided)
            engine: Diff engine to use instead of the difflib based one
        """
        self.config = config or Config()
        self.services = ServiceFactory(self.config, engine)
        self._old_text = old_text
        self._new_text = new_text
        self._line_context_size = (
            line_context_size
            if line_context_size is not None
            else self.config.context_size
        )
        self._listeners: list[ILineSelectListener] = []
        self._calculated_diff: list[LineDiff] = []
        self._is_content_equal = False
        self._selected_line: LineDiff | None = None
        self._recompute(self._old_text, self._new_text, self._line_context_size)

    @property
    def old_text(self) -> Any:
        return self._old_text

    @old_text.setter
    def old_text(self, value: Any) -> None:
        self.update(old_text=value)

    @property
    def new_text(self) -> Any:
        return self._new_text

    @new_text.setter
    def new_text(self, value: Any) -> None:
        self.update(new_text=value)

    @property
    def line_context_size(self) -> int | None:
        return self._line_context_size

    @line_context_size.setter
    def line_context_size(self, value: int | None) -> None:
        self.update(line_context_size=value)

    @property
    def calculated_diff(self) -> list[LineDiff]:
        """Get the computed lines; empty when the contents are equal."""
        return list(self._calculated_diff)

    @property
    def result(self) -> LineDiffResult:
        """Get the computed diff as a single result object."""
        return LineDiffResult(
            is_content_equal=self._is_content_equal, lines=self.calculated_diff
        )

    @property
    def is_content_equal(self) -> bool:
        return self._is_content_equal

    @property
    def selected_line(self) -> LineDiff | None:
        return self._selected_line

    def update(
        self,
        old_text: Any = _UNSET,
        new_text: Any = _UNSET,
        line_context_size: Any = _UNSET,
    ) -> None:
        """Change one or more inputs and recompute the diff once.

        Args:
            old_text: New value for the original text
            new_text: New value for the new text
            line_context_size: New context size

        Raises:
            ServiceError: If the diff cannot be computed; the previous inputs
                and diff are kept
        """
        if old_text is _UNSET:
            old_text = self._old_text
        if new_text is _UNSET:
            new_text = self._new_text
        if line_context_size is _UNSET:
            line_context_size = self._line_context_size

        # Inputs are only stored once the diff for them has been computed
        self._recompute(old_text, new_text, line_context_size)
        self._old_text = old_text
        self._new_text = new_text
        self._line_context_size = line_context_size

    def add_listener(self, listener: ILineSelectListener) -> None:
        """Register a callback for line selections."""
        self._listeners.append(listener)

    def remove_listener(self, listener: ILineSelectListener) -> None:
        """Unregister a callback; unknown callbacks are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def select_line(self, index: int) -> LineSelectEvent:
        """Select a computed line and notify listeners.

        Args:
            index: Position of the line in ``calculated_diff``

        Returns:
            The event passed to every listener

        Raises:
            IndexError: If no computed line has that position
        """
        if not 0 <= index < len(self._calculated_diff):
            raise IndexError(
                f"Line index {index} out of range for "
                f"{len(self._calculated_diff)} lines"
            )
        line = self._calculated_diff[index]
        self._selected_line = line
        event = self.services.inline_diff.select_line(index, line)
        logger.debug(f"Line {index} selected ({line.kind.value})")
        for listener in list(self._listeners):
            listener(event)
        return event

    def _recompute(
        self, old_text: Any, new_text: Any, line_context_size: int | None
    ) -> None:
        result = self.services.inline_diff.compute(
            old_text, new_text, line_context_size
        )
        self._is_content_equal = result.is_content_equal
        self._calculated_diff = result.lines
        self._selected_line = None
