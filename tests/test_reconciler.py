# test_reconciler.py

import pytest
from unittest.mock import Mock

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from termline.session.reconciler import DisplayReconciler
from termline.session.state import InputPhase, RowKind, ViewState
from termline.transcript import LineKind


class MockDisplay:
    def __init__(self):
        self.render = Mock()
        self.refresh = Mock()


class MockLogger:
    def __init__(self):
        self.debug = Mock()
        self.info = Mock()
        self.warning = Mock()
        self.error = Mock()


class TestDisplayReconciler:
    """Test suite for transcript reconciliation."""

    def setup_method(self):
        self.display = MockDisplay()
        self.logger = MockLogger()
        self.typesetter = Mock(spec=["enqueue"])
        self.reconciler = DisplayReconciler(
            display=self.display,
            typesetter=self.typesetter,
            logger=self.logger
        )
        self.state = ViewState()

    def rows(self):
        return [(row.kind, row.text) for row in self.state.view.rows]

    def test_empty_transcript_is_noop(self):
        assert self.reconciler.reconcile(self.state, []) is False
        assert self.state.view.rows == []
        self.display.render.assert_not_called()

    def test_plain_lines_render_in_order(self):
        assert self.reconciler.reconcile(self.state, ["one", "two"]) is True
        assert self.rows() == [(RowKind.LINE, "one"), (RowKind.LINE, "two")]
        assert self.state.last_length == 2
        assert self.state.view.scrolled_to_end
        self.display.render.assert_called_once_with(self.state.view)

    def test_equal_length_does_not_touch_view(self):
        self.reconciler.reconcile(self.state, ["Hello", "INPUT_REQUEST:1:Name?"])
        field = self.state.input_field
        field.value = "Ali"
        rows_before = list(self.state.view.rows)
        self.display.render.reset_mock()

        # Same length, different content
        assert self.reconciler.reconcile(self.state, ["Bye", "INPUT_REQUEST:9:Other?"]) is False

        assert self.state.input_field is field
        assert field.value == "Ali"
        assert self.state.request.id == "1"
        assert self.state.view.rows == rows_before
        self.display.render.assert_not_called()

    def test_completed_request_renders_combined_row(self):
        self.reconciler.reconcile(self.state, ["INPUT_REQUEST:1:Name?", "Alice"])
        assert self.rows() == [(RowKind.COMPLETED, "Name? Alice")]
        assert self.state.input_field is None
        assert self.state.request is None
        assert self.state.phase is InputPhase.IDLE

    def test_open_request_mounts_single_field(self):
        self.reconciler.reconcile(self.state, ["Hello", "INPUT_REQUEST:7:Age?"])
        assert self.rows() == [(RowKind.LINE, "Hello"), (RowKind.INPUT, "Age?")]
        field = self.state.input_field
        assert field is not None
        assert field.request_id == "7"
        assert field.prompt == "Age?"
        assert field.value == ""
        assert field.focused
        assert self.state.view.input_field is field
        assert self.state.request.id == "7"
        assert self.state.request.prompt == "Age?"
        assert self.state.phase is InputPhase.AWAITING_ENTRY

    def test_typed_value_is_carried_across_rebuild(self):
        self.reconciler.reconcile(self.state, ["INPUT_REQUEST:1:Name?"])
        self.state.input_field.value = "Ali"
        self.state.input_field.show_error("old error")

        self.reconciler.reconcile(self.state, ["progress...", "INPUT_REQUEST:1:Name?"])

        field = self.state.input_field
        assert field.request_id == "1"
        assert field.value == "Ali"
        assert field.error is None

    def test_disabled_field_value_is_not_carried(self):
        self.reconciler.reconcile(self.state, ["INPUT_REQUEST:1:Name?"])
        self.state.input_field.value = "Alice"
        self.state.input_field.disabled = True

        self.reconciler.reconcile(self.state, ["INPUT_REQUEST:1:Name?", "Alice", "INPUT_REQUEST:2:Age?"])

        assert self.state.input_field.request_id == "2"
        assert self.state.input_field.value == ""

    def test_program_finished_does_not_complete_request(self):
        self.reconciler.reconcile(self.state, ["INPUT_REQUEST:1:Name?", "PROGRAM_FINISHED"])
        # The marker is swallowed as the line after an unresolved request
        assert self.rows() == [(RowKind.INPUT, "Name?")]
        assert self.state.request.id == "1"
        assert not self.state.input_field.disabled

    def test_program_finished_alone_renders_verbatim(self):
        self.reconciler.reconcile(self.state, ["done", "PROGRAM_FINISHED"])
        assert self.rows() == [(RowKind.LINE, "done"), (RowKind.LINE, "PROGRAM_FINISHED")]

    def test_last_unresolved_request_is_open(self):
        self.reconciler.reconcile(self.state, ["INPUT_REQUEST:1:First?", "INPUT_REQUEST:2:Second?"])
        assert self.rows() == [(RowKind.STALE, "First?"), (RowKind.INPUT, "Second?")]
        assert self.state.request.id == "2"
        assert self.state.input_field.request_id == "2"
        self.logger.warning.assert_called_once()

    def test_open_request_skips_completed_requests(self):
        self.reconciler.reconcile(self.state, [
            "INPUT_REQUEST:1:First?", "INPUT_REQUEST:2:Name?", "Alice",
            "INPUT_REQUEST:3:Age?",
        ])
        assert self.rows() == [
            (RowKind.STALE, "First?"),
            (RowKind.COMPLETED, "Name? Alice"),
            (RowKind.INPUT, "Age?"),
        ]
        assert self.state.request.id == "3"

    def test_request_before_program_finished_stays_open(self):
        self.reconciler.reconcile(self.state, ["INPUT_REQUEST:1:a?", "INPUT_REQUEST:2:b?", "PROGRAM_FINISHED"])
        assert self.state.request.id == "2"
        assert self.rows() == [(RowKind.STALE, "a?"), (RowKind.INPUT, "b?")]

    def test_display_math_row_is_wrapped_and_typeset(self):
        self.reconciler.reconcile(self.state, ["LATEX_DISPLAY:x^2+y^2=z^2"])
        row = self.state.view.rows[0]
        assert row.kind is RowKind.LINE
        assert row.line.kind is LineKind.DISPLAY_MATH
        assert row.markup == "$$x^2+y^2=z^2$$"
        self.typesetter.enqueue.assert_called_once_with(self.state.view)

    def test_inline_math_is_wrapped(self):
        self.reconciler.reconcile(self.state, ["LATEX_INLINE:a+b"])
        assert self.state.view.rows[0].markup == "$a+b$"

    def test_no_math_no_typesetting(self):
        self.reconciler.reconcile(self.state, ["plain"])
        self.typesetter.enqueue.assert_not_called()

    def test_math_echo_is_typeset(self):
        self.reconciler.reconcile(self.state, ["INPUT_REQUEST:1:Formula?", "LATEX_INLINE:x"])
        row = self.state.view.rows[0]
        assert row.kind is RowKind.COMPLETED
        assert row.text == "Formula? $x$"
        self.typesetter.enqueue.assert_called_once()

    def test_missing_typesetter_is_silent(self):
        reconciler = DisplayReconciler(display=self.display, typesetter=None)
        assert reconciler.reconcile(self.state, ["LATEX_DISPLAY:x"]) is True
        self.display.render.assert_called_once()

    def test_forced_refresh_rebuilds_once(self):
        self.reconciler.reconcile(self.state, ["a", "b"])
        self.state.force_refresh()
        assert self.reconciler.reconcile(self.state, ["a", "b"]) is True
        assert self.reconciler.reconcile(self.state, ["a", "b"]) is False

    def test_rebuild_without_request_returns_to_idle(self):
        self.reconciler.reconcile(self.state, ["INPUT_REQUEST:1:Name?"])
        assert self.state.phase is InputPhase.AWAITING_ENTRY
        self.reconciler.reconcile(self.state, ["INPUT_REQUEST:1:Name?", "Bob"])
        assert self.state.phase is InputPhase.IDLE

    def test_rebuild_keeps_in_flight_phase(self):
        self.reconciler.reconcile(self.state, ["INPUT_REQUEST:1:Name?"])
        self.state.phase = InputPhase.VALIDATING
        self.reconciler.reconcile(self.state, ["tick", "INPUT_REQUEST:1:Name?"])
        assert self.state.phase is InputPhase.VALIDATING
        assert self.state.request.id == "1"

    def test_works_without_display(self):
        reconciler = DisplayReconciler()
        assert reconciler.reconcile(self.state, ["x"]) is True
        assert self.rows() == [(RowKind.LINE, "x")]
