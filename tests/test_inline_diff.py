from unittest.mock import Mock

import pytest

from inlinediff.config import Config
from inlinediff.diff import DiffGenerator
from inlinediff.inline_diff import InlineDiff
from inlinediff.models import DiffOp, DiffOperation, LineDiffType, LineSelectEvent
from inlinediff.services.interfaces import (
    DiffContractError,
    DiffEngineError,
    IDiffEngine,
)


class TestInlineDiff:
    """Test cases for the InlineDiff class."""

    def setup_method(self):
        """Set up test environment before each test."""
        self.engine = Mock(wraps=DiffGenerator())
        self.inline_diff = InlineDiff(
            old_text="a\nb\nc\n",
            new_text="a\nB\nc\n",
            engine=self.engine,
        )

    def test_diff_is_computed_on_creation(self):
        """Test that the diff is available right after creation."""
        assert self.inline_diff.is_content_equal is False
        assert [l.kind for l in self.inline_diff.calculated_diff] == [
            LineDiffType.EQUAL,
            LineDiffType.DELETE,
            LineDiffType.INSERT,
            LineDiffType.EQUAL,
        ]
        assert self.engine.compute_line_diff.call_count == 1

    def test_default_inputs(self):
        """Test that a diff without inputs is content-equal."""
        inline_diff = InlineDiff()
        assert inline_diff.is_content_equal is True
        assert inline_diff.calculated_diff == []
        assert inline_diff.selected_line is None

    def test_context_size_defaults_to_config(self):
        """Test that the configured context size is used by default."""
        inline_diff = InlineDiff(config=Config(context_size=4))
        assert inline_diff.line_context_size == 4

    def test_setting_text_recomputes(self):
        """Test that changing a text recomputes the diff."""
        self.inline_diff.new_text = "a\nb\nc\n"

        assert self.inline_diff.is_content_equal is True
        assert self.inline_diff.calculated_diff == []

        self.inline_diff.old_text = "z\n"

        assert self.inline_diff.is_content_equal is False
        assert self.engine.compute_line_diff.call_count == 2

    def test_setting_context_size_recomputes(self):
        """Test that changing the context size recomputes the diff."""
        self.inline_diff.update(
            old_text="".join(f"l{i}\n" for i in range(10)),
            new_text="".join(f"l{i}\n" for i in range(9)) + "x\n",
        )
        assert len(self.inline_diff.calculated_diff) == 11

        self.inline_diff.line_context_size = 2

        assert [l.content for l in self.inline_diff.calculated_diff] == [
            "l7",
            "l8",
            "l9",
            "x",
        ]

    def test_update_recomputes_once(self):
        """Test that update changes several inputs with one computation."""
        self.inline_diff.update(old_text="1\n", new_text="2\n", line_context_size=1)

        assert self.engine.compute_line_diff.call_count == 2
        assert self.inline_diff.line_context_size == 1
        assert [l.content for l in self.inline_diff.calculated_diff] == ["1", "2"]

    def test_scalar_inputs(self):
        """Test that scalar inputs are compared as text."""
        self.inline_diff.update(old_text=42, new_text="42")
        assert self.inline_diff.is_content_equal is True

    def test_result(self):
        """Test the combined result object."""
        result = self.inline_diff.result
        assert result.is_content_equal is False
        assert result.lines == self.inline_diff.calculated_diff

    def test_calculated_diff_is_a_copy(self):
        """Test that callers cannot change the computed lines."""
        self.inline_diff.calculated_diff.clear()
        assert len(self.inline_diff.calculated_diff) == 4

    def test_select_line_notifies_listeners(self):
        """Test that selecting a line reaches every listener."""
        received: list[LineSelectEvent] = []
        other = Mock()
        self.inline_diff.add_listener(received.append)
        self.inline_diff.add_listener(other)

        event = self.inline_diff.select_line(1)

        assert received == [event]
        other.assert_called_once_with(event)
        assert event.index == 1
        assert event.kind == LineDiffType.DELETE
        assert event.old_line_number == 2
        assert event.new_line_number is None
        assert event.content == "b"
        assert self.inline_diff.selected_line == self.inline_diff.calculated_diff[1]

    def test_removed_listener_is_not_called(self):
        """Test that removed listeners are no longer notified."""
        listener = Mock()
        self.inline_diff.add_listener(listener)
        self.inline_diff.remove_listener(listener)
        self.inline_diff.remove_listener(listener)

        self.inline_diff.select_line(0)

        listener.assert_not_called()

    def test_select_line_out_of_range(self):
        """Test that selecting a missing line raises IndexError."""
        with pytest.raises(IndexError):
            self.inline_diff.select_line(4)
        with pytest.raises(IndexError):
            self.inline_diff.select_line(-1)

    def test_recompute_clears_selection(self):
        """Test that a new computation drops the previous selection."""
        self.inline_diff.select_line(0)
        self.inline_diff.new_text = "changed\n"
        assert self.inline_diff.selected_line is None


class TestInlineDiffFailedUpdate:
    """Test cases for updates whose diff cannot be computed."""

    def setup_method(self):
        """Set up test environment before each test."""
        self.engine = Mock(spec=IDiffEngine)
        self.engine.compute_line_diff.return_value = [
            DiffOperation(op=DiffOp.DELETE, text="a\n"),
            DiffOperation(op=DiffOp.INSERT, text="b\n"),
        ]
        self.inline_diff = InlineDiff("a\n", "b\n", engine=self.engine)

    def _contents(self) -> list[tuple[LineDiffType, str]]:
        return [(l.kind, l.content) for l in self.inline_diff.calculated_diff]

    def test_failed_update_keeps_previous_inputs(self):
        """Test that inputs and diff stay consistent when an update fails."""
        # Operations that do not rebuild the new text
        self.engine.compute_line_diff.return_value = [
            DiffOperation(op=DiffOp.DELETE, text="a\n"),
        ]

        with pytest.raises(DiffContractError):
            self.inline_diff.new_text = "c\n"

        assert self.inline_diff.new_text == "b\n"
        assert self.inline_diff.old_text == "a\n"
        assert self._contents() == [
            (LineDiffType.DELETE, "a"),
            (LineDiffType.INSERT, "b"),
        ]

    def test_failed_update_keeps_context_size_and_selection(self):
        """Test that a failed multi-input update changes nothing."""
        self.inline_diff.select_line(1)
        self.engine.compute_line_diff.side_effect = RuntimeError("engine down")

        with pytest.raises(DiffEngineError):
            self.inline_diff.update(old_text="x\n", line_context_size=5)

        assert self.inline_diff.old_text == "a\n"
        assert self.inline_diff.line_context_size is None
        assert self.inline_diff.selected_line == self.inline_diff.calculated_diff[1]

    def test_update_after_failure_succeeds(self):
        """Test that a later valid update is applied normally."""
        self.engine.compute_line_diff.side_effect = RuntimeError("engine down")
        with pytest.raises(DiffEngineError):
            self.inline_diff.new_text = "c\n"

        self.engine.compute_line_diff.side_effect = None
        self.engine.compute_line_diff.return_value = [
            DiffOperation(op=DiffOp.DELETE, text="a\n"),
            DiffOperation(op=DiffOp.INSERT, text="c\n"),
        ]
        self.inline_diff.new_text = "c\n"

        assert self.inline_diff.new_text == "c\n"
        assert self._contents() == [
            (LineDiffType.DELETE, "a"),
            (LineDiffType.INSERT, "c"),
        ]
