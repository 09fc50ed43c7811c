# display/style/definitions.py

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class RowStyle:
    """
    How one kind of row is drawn.
    """
    name: str
    color: Optional[str] = None
    italic: bool = False
    bold: bool = False
    centered: bool = False


class StyleDefinitions:
    """
    Core style definitions container that serves as the foundation layer
    for the styling system. Has no external dependencies.
    """

    def __init__(
        self,
        colors: Optional[Dict[str, Dict[str, str]]] = None,
        row_styles: Optional[Dict[str, RowStyle]] = None
    ):
        """
        Initialize style definitions with optional custom configurations.
        """
        self._default_colors = {
            'GREEN': {'ansi': '\033[38;5;47m', 'rich': 'green3'},
            'BLUE': {'ansi': '\033[38;5;75m', 'rich': 'blue1'},
            'GRAY': {'ansi': '\033[38;5;245m', 'rich': 'gray50'},
            'YELLOW': {'ansi': '\033[38;5;227m', 'rich': 'yellow1'},
            'RED': {'ansi': '\033[38;5;203m', 'rich': 'red1'},
            'WHITE': {'ansi': '\033[38;5;255m', 'rich': 'white'}
        }
        self.colors = colors if colors is not None else self._default_colors.copy()
        self.row_styles = row_styles if row_styles is not None else self._create_default_row_styles()

    def _create_default_row_styles(self) -> Dict[str, RowStyle]:
        """Create the default style for each row kind and row part."""
        return {
            'text': RowStyle('text', color='WHITE'),
            'display_math': RowStyle('display_math', color='YELLOW', centered=True),
            'inline_math': RowStyle('inline_math', color='YELLOW', italic=True),
            'prompt': RowStyle('prompt', color='BLUE', bold=True),
            'completed': RowStyle('completed', color='GREEN'),
            'stale': RowStyle('stale', color='GRAY', italic=True),
            'disabled': RowStyle('disabled', color='GRAY'),
            'error': RowStyle('error', color='RED'),
        }

    def get_color(self, name: str) -> Dict[str, str]:
        """Get a color configuration by name."""
        return self.colors.get(name, {'ansi': '', 'rich': ''})

    def get_row_style(self, name: str) -> RowStyle:
        """Get a row style by name, falling back to plain text."""
        return self.row_styles.get(name) or self.row_styles['text']
