import logging

from .models import LineDiffType

DEFAULT_DISPLAY_TAGS: dict[LineDiffType, str] = {
    LineDiffType.EQUAL: "inline-diff-equal",
    LineDiffType.INSERT: "inline-diff-insert",
    LineDiffType.DELETE: "inline-diff-delete",
    LineDiffType.SKIP: "inline-diff-equal",
}


class Config:
    """
    Configuration class for the inline diff system.

    This class provides customizable settings for diff computation,
    including context windowing, display tags, and logging preferences.
    """

    def __init__(
        self,
        context_size: int | None = None,
        log_level: int = logging.INFO,
        display_tags: dict[LineDiffType, str] | None = None,
        validate_operations: bool = True,
    ):
        """
        Initialize configuration for inline diffs.

        Args:
            context_size: Number of unchanged lines kept on each side of a
                change. None, zero or a negative value disables windowing.
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                Default: INFO.
            display_tags: Mapping from line kind to display tag. Must cover
                every kind. Default: the ``inline-diff-*`` tags.
            validate_operations: Whether engine output is checked to rebuild
                both input texts. Default: True.

        Raises:
            ValueError: If display_tags does not cover every line kind
        """
        self.context_size: int | None = context_size
        self.log_level: int = log_level
        self.display_tags: dict[LineDiffType, str] = dict(
            display_tags or DEFAULT_DISPLAY_TAGS
        )
        missing = set(LineDiffType) - set(self.display_tags)
        if missing:
            names = ", ".join(sorted(kind.value for kind in missing))
            raise ValueError(f"display_tags is missing tags for: {names}")
        self.validate_operations: bool = validate_operations

        # Configure logging
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(log_level)
