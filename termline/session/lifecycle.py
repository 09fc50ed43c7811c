# session/lifecycle.py

from ..errors import TransportError
from .state import InputPhase, ViewState

EMPTY_VALUE_MESSAGE = "Please enter a value"


class InputLifecycle:
    """
    Drives the open input request from entry through validation to submission.

    Phases: IDLE -> AWAITING_ENTRY -> VALIDATING -> SUBMITTING -> IDLE.
    Errors are an overlay on the mounted field and never change the phase.
    """

    def __init__(self, state: ViewState, client, display=None, logger=None):
        self.state = state
        self.client = client
        self.display = display
        self.logger = logger

    def _refresh(self) -> None:
        if self.display:
            self.display.refresh()

    def on_keystroke(self, value: str) -> None:
        """Record the live field value; typing clears a shown error."""
        field = self.state.input_field
        if field is None or field.disabled:
            return
        field.value = value
        if value.strip() and field.error:
            field.clear_error()
            self._refresh()

    async def commit(self) -> None:
        """Handle the user accepting the current field value."""
        field = self.state.input_field
        request = self.state.request
        if field is None or request is None or field.disabled:
            return
        if self.state.submitting:
            if self.logger:
                self.logger.debug("Commit ignored: submission in flight")
            return

        value = field.value.strip()
        if not value:
            field.show_error(EMPTY_VALUE_MESSAGE)
            field.focus()
            self._refresh()
            return

        self.state.phase = InputPhase.VALIDATING
        if self.logger:
            self.logger.debug(f"Validating {value!r} for request {request.id!r}")
        try:
            result = await self.client.validate(request.id, value)
        except TransportError as e:
            # No recovery: the user may commit again
            if self.logger:
                self.logger.error(f"Validation failed for request {request.id!r}: {e}")
            return

        current = self.state.input_field
        if result.valid:
            if current:
                current.clear_error()
            await self.submit()
            return

        if self.logger:
            self.logger.debug(f"Server rejected {value!r}: {result.error}")
        field.value = ""
        if current:
            current.show_error(result.error or "Invalid value")
            current.focus()
        if self.state.phase is InputPhase.VALIDATING:
            self.state.phase = InputPhase.AWAITING_ENTRY
        self._refresh()

    async def submit(self) -> None:
        """Submit the mounted field's value. Rejected while a submission is in flight."""
        field = self.state.input_field
        request = self.state.request
        if field is None or request is None or self.state.submitting:
            return
        value = field.value
        if not value.strip():
            return

        self.state.phase = InputPhase.SUBMITTING
        field.disabled = True
        self._refresh()
        if self.logger:
            self.logger.debug(f"Submitting value for request {request.id!r}")
        try:
            await self.client.submit(request.id, value)
        except TransportError as e:
            if self.logger:
                self.logger.error(f"Submission failed for request {request.id!r}: {e}")
            self.state.phase = InputPhase.IDLE
            return

        self.state.reset_ephemeral()
        self.state.phase = InputPhase.IDLE
        # The next poll rebuilds even if the server has not grown the transcript yet
        self.state.force_refresh()
        if self.logger:
            self.logger.info(f"Submitted request {request.id!r}")
