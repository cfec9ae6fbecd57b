from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

SKIP_MARKER = "..."


class DiffOp(str, Enum):
    EQUAL = "equal"
    INSERT = "insert"
    DELETE = "delete"


class LineDiffType(str, Enum):
    EQUAL = "equal"
    INSERT = "insert"
    DELETE = "delete"
    SKIP = "skip"


class DiffOperation(BaseModel):
    op: DiffOp
    text: str

    model_config = ConfigDict(frozen=True)


class LineDiff(BaseModel):
    kind: LineDiffType
    old_line_number: int | None = None
    new_line_number: int | None = None
    content: str = ""
    display_tag: str = ""

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_line_numbers(self) -> "LineDiff":
        """Ensure the line numbers present match the kind of line.

        Raises:
            ValueError: If a number is missing or present where it must not be
        """
        has_old = self.old_line_number is not None
        has_new = self.new_line_number is not None
        expected = {
            LineDiffType.EQUAL: (True, True),
            LineDiffType.INSERT: (False, True),
            LineDiffType.DELETE: (True, False),
            LineDiffType.SKIP: (False, False),
        }[self.kind]
        if (has_old, has_new) != expected:
            raise ValueError(
                f"{self.kind.value} line has old={self.old_line_number}, "
                f"new={self.new_line_number}"
            )
        if self.kind == LineDiffType.SKIP and self.content != SKIP_MARKER:
            raise ValueError(f"skip line must carry {SKIP_MARKER!r}")
        return self

    @property
    def is_skip(self) -> bool:
        return self.kind == LineDiffType.SKIP


class LineDiffResult(BaseModel):
    is_content_equal: bool = False
    lines: list[LineDiff] = Field(default_factory=list)


class LineSelectEvent(BaseModel):
    index: int
    kind: LineDiffType
    old_line_number: int | None = None
    new_line_number: int | None = None
    content: str

    model_config = ConfigDict(frozen=True)


class OutputFormat(str, Enum):
    TABLE = "table"
    TEXT = "text"
    JSON = "json"
