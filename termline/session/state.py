# session/state.py

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..transcript import TranscriptLine

ERROR_GLYPH = "❌"


class InputPhase(Enum):
    IDLE = "idle"
    AWAITING_ENTRY = "awaiting_entry"
    VALIDATING = "validating"
    SUBMITTING = "submitting"


class RowKind(Enum):
    LINE = "line"
    COMPLETED = "completed"
    INPUT = "input"
    STALE = "stale"


@dataclass(frozen=True)
class OpenInputRequest:
    """The single unresolved prompt currently waiting for a value."""
    id: str
    prompt: str


@dataclass
class Row:
    """
    One rendered row of the view.

    `line` is the classified content for LINE rows and the echoed value for
    COMPLETED rows. `typeset` is filled in by a math engine after rendering.
    """
    kind: RowKind
    line: Optional[TranscriptLine] = None
    prompt: str = ""
    typeset: Optional[str] = None

    @property
    def is_math(self) -> bool:
        return self.line is not None and self.line.is_math

    @property
    def markup(self) -> str:
        return self.line.markup() if self.line else ""

    @property
    def text(self) -> str:
        """Plain text of the row as it should read on screen."""
        body = self.typeset if self.typeset is not None else self.markup
        if self.kind is RowKind.COMPLETED:
            return f"{self.prompt} {body}"
        if self.kind in (RowKind.INPUT, RowKind.STALE):
            return self.prompt
        return body


@dataclass
class InputField:
    """The editable field mounted for the open request, with its error overlay."""
    request_id: str
    prompt: str
    value: str = ""
    disabled: bool = False
    focused: bool = False
    error: Optional[str] = None

    def show_error(self, message: str) -> None:
        # Singular: a new error replaces the previous one
        self.error = f"{ERROR_GLYPH} {message}"

    def clear_error(self) -> None:
        self.error = None

    def focus(self) -> None:
        self.focused = True


@dataclass
class RenderedView:
    rows: List[Row] = field(default_factory=list)
    input_field: Optional[InputField] = None
    scrolled_to_end: bool = False

    def clear(self) -> None:
        self.rows = []
        self.input_field = None
        self.scrolled_to_end = False

    def append(self, row: Row) -> None:
        self.rows.append(row)

    @property
    def has_math(self) -> bool:
        return any(row.is_math for row in self.rows)


@dataclass
class ViewState:
    """
    All mutable client state, owned by the session.

    `last_length` is None when the next poll must be treated as changed
    regardless of the transcript length.
    """
    last_length: Optional[int] = 0
    request: Optional[OpenInputRequest] = None
    input_field: Optional[InputField] = None
    phase: InputPhase = InputPhase.IDLE
    view: RenderedView = field(default_factory=RenderedView)
    program_finished: bool = False

    @property
    def submitting(self) -> bool:
        return self.phase is InputPhase.SUBMITTING

    def length_changed(self, length: int) -> bool:
        return self.last_length is None or self.last_length != length

    def force_refresh(self) -> None:
        self.last_length = None

    def reset_ephemeral(self) -> None:
        """Drop the open request, its field and error. Phase is left to the caller."""
        self.request = None
        self.input_field = None
