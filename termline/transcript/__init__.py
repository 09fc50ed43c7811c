# transcript/__init__.py

from .lines import (
    LineKind,
    TranscriptLine,
    classify_line,
    is_input_request,
    is_program_finished,
)
from .snapshot import TranscriptSnapshot

__all__ = [
    'LineKind',
    'TranscriptLine',
    'TranscriptSnapshot',
    'classify_line',
    'is_input_request',
    'is_program_finished',
]
