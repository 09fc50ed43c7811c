# session/reconciler.py

from functools import partial
from typing import Optional, Sequence

from ..transcript import (
    LineKind,
    classify_line,
    is_input_request,
    is_program_finished,
)
from ..typeset import typeset_view
from .state import (
    InputField,
    InputPhase,
    OpenInputRequest,
    Row,
    RowKind,
    ViewState,
)


class DisplayReconciler:
    """
    Rebuilds the rendered view from a transcript whenever its length changes.

    The rebuild is total: every row is recreated and at most one input field
    is mounted, for the last unresolved request. Text typed into the previous
    field is carried over into the new one.
    """

    def __init__(self, display=None, typesetter=None, logger=None):
        self.display = display
        self.typesetter = typesetter
        self.logger = logger

    def reconcile(self, state: ViewState, output: Sequence[str]) -> bool:
        """Reconcile the view against `output`. Returns True if the view was rebuilt."""
        if not state.length_changed(len(output)):
            return False

        if self.logger:
            self.logger.debug(f"Transcript length {state.last_length} -> {len(output)}, rebuilding view")
        state.last_length = len(output)

        carried_value = ""
        if state.input_field and not state.input_field.disabled:
            carried_value = state.input_field.value

        state.reset_ephemeral()
        view = state.view
        view.clear()
        if state.phase is InputPhase.AWAITING_ENTRY:
            state.phase = InputPhase.IDLE

        open_index = self._last_unresolved(output)
        needs_typeset = False
        i = 0
        while i < len(output):
            line = output[i]
            classified = classify_line(line)

            if classified.kind is LineKind.INPUT_REQUEST:
                if not self._is_unresolved(output, i):
                    echo = classify_line(output[i + 1])
                    view.append(Row(RowKind.COMPLETED, line=echo, prompt=classified.text))
                    needs_typeset = needs_typeset or echo.is_math
                    i += 2
                    continue
                if i == open_index:
                    self._mount_field(state, classified.request_id, classified.text, carried_value)
                else:
                    # Superseded by a later unresolved request; shown without a field
                    view.append(Row(RowKind.STALE, prompt=classified.text))
                    if self.logger:
                        self.logger.warning(
                            f"Unresolved input request {classified.request_id!r} "
                            f"superseded by a later request"
                        )
            else:
                previous = output[i - 1] if i > 0 else None
                if previous is None or not is_input_request(previous):
                    view.append(Row(RowKind.LINE, line=classified))
                    needs_typeset = needs_typeset or classified.is_math
            i += 1

        if needs_typeset:
            on_done = partial(self.display.render, view) if self.display else None
            typeset_view(self.typesetter, view, logger=self.logger, on_done=on_done)

        view.scrolled_to_end = True
        if self.display:
            self.display.render(view)
        return True

    @staticmethod
    def _is_unresolved(output: Sequence[str], i: int) -> bool:
        if not is_input_request(output[i]):
            return False
        next_line = output[i + 1] if i + 1 < len(output) else None
        return (
            next_line is None
            or is_input_request(next_line)
            or is_program_finished(next_line)
        )

    def _last_unresolved(self, output: Sequence[str]) -> Optional[int]:
        """Index of the request the remote program is blocked on, if any."""
        i = 0
        last = None
        while i < len(output):
            if is_input_request(output[i]):
                if not self._is_unresolved(output, i):
                    # Skip the echo line consumed by this completed request
                    i += 2
                    continue
                last = i
            i += 1
        return last

    def _mount_field(self, state: ViewState, request_id: str, prompt: str, value: str) -> None:
        field = InputField(request_id=request_id, prompt=prompt, value=value)
        field.focus()
        state.request = OpenInputRequest(request_id, prompt)
        state.input_field = field
        state.view.input_field = field
        state.view.append(Row(RowKind.INPUT, prompt=prompt))
        if state.phase is InputPhase.IDLE:
            state.phase = InputPhase.AWAITING_ENTRY
        if self.logger:
            self.logger.debug(f"Open input request {request_id!r}: {prompt!r}")
