# transcript/lines.py

from dataclasses import dataclass
from enum import Enum

LATEX_DISPLAY = "LATEX_DISPLAY:"
LATEX_INLINE = "LATEX_INLINE:"
INPUT_REQUEST = "INPUT_REQUEST:"
PROGRAM_FINISHED = "PROGRAM_FINISHED"


class LineKind(Enum):
    PLAIN = "plain"
    DISPLAY_MATH = "display_math"
    INLINE_MATH = "inline_math"
    INPUT_REQUEST = "input_request"


@dataclass(frozen=True)
class TranscriptLine:
    """
    A single transcript line after its leading tag has been parsed.

    `text` holds the payload: plain text, a formula, or the prompt of an
    input request. `request_id` is only set for input requests.
    """
    kind: LineKind
    text: str
    request_id: str = ""

    @property
    def is_math(self) -> bool:
        return self.kind in (LineKind.DISPLAY_MATH, LineKind.INLINE_MATH)

    def markup(self) -> str:
        """Return the text as it is shown, with math wrapped in its delimiters."""
        if self.kind is LineKind.DISPLAY_MATH:
            return f"$${self.text}$$"
        if self.kind is LineKind.INLINE_MATH:
            return f"${self.text}$"
        return self.text


def is_input_request(line: str) -> bool:
    return line.startswith(INPUT_REQUEST)


def is_program_finished(line: str) -> bool:
    return line.startswith(PROGRAM_FINISHED)


def classify_line(line: str) -> TranscriptLine:
    """
    Parse the tag prefix of a raw transcript line.

    Tags are not escaped, so any content starting with a tag prefix is read
    as that tag. Malformed input requests degrade to empty id/prompt.
    """
    if line.startswith(LATEX_DISPLAY):
        return TranscriptLine(LineKind.DISPLAY_MATH, line[len(LATEX_DISPLAY):])
    if line.startswith(LATEX_INLINE):
        return TranscriptLine(LineKind.INLINE_MATH, line[len(LATEX_INLINE):])
    if line.startswith(INPUT_REQUEST):
        parts = line.split(':')
        request_id = parts[1] if len(parts) > 1 else ""
        # Prompts may contain colons ("Enter x:")
        prompt = ':'.join(parts[2:])
        return TranscriptLine(LineKind.INPUT_REQUEST, prompt, request_id)
    return TranscriptLine(LineKind.PLAIN, line)
