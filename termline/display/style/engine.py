# display/style/engine.py

from io import StringIO
from typing import List, Optional

from rich.align import Align
from rich.console import Console
from rich.style import Style
from rich.text import Text

from ...session.state import InputField, RenderedView, Row, RowKind
from ...transcript import LineKind
from .definitions import StyleDefinitions


class StyleEngine:
    """
    Turns a rendered view into styled terminal text using Rich.
    """
    def __init__(self, definitions: StyleDefinitions, terminal=None):
        self.definitions = definitions
        self.terminal = terminal
        self.rich_style = {
            name: self._to_rich(name)
            for name in self.definitions.row_styles
        }

    def _to_rich(self, name: str) -> Style:
        row_style = self.definitions.get_row_style(name)
        color = self.definitions.get_color(row_style.color)['rich'] if row_style.color else None
        return Style(color=color or None, italic=row_style.italic, bold=row_style.bold)

    def get_rich_style(self, name: str) -> Style:
        """Return Rich style by name."""
        return self.rich_style.get(name, Style())

    def _width(self) -> int:
        return self.terminal.width if self.terminal else 80

    def _body_style(self, row: Row) -> str:
        if row.line is None:
            return 'text'
        if row.line.kind is LineKind.DISPLAY_MATH:
            return 'display_math'
        if row.line.kind is LineKind.INLINE_MATH:
            return 'inline_math'
        return 'text'

    def row_renderable(self, row: Row, field: Optional[InputField] = None):
        """Build the Rich renderable for one row."""
        body = row.typeset if row.typeset is not None else row.markup
        if row.kind is RowKind.COMPLETED:
            text = Text(row.prompt, style=self.get_rich_style('prompt'))
            text.append(" ")
            text.append(body, style=self.get_rich_style('completed'))
            return text
        if row.kind is RowKind.STALE:
            return Text(row.prompt, style=self.get_rich_style('stale'))
        if row.kind is RowKind.INPUT:
            # Only a disabled field is drawn here; a live field belongs to the editor
            text = Text(row.prompt, style=self.get_rich_style('prompt'))
            if field is not None and field.disabled:
                text.append(" ")
                text.append(field.value, style=self.get_rich_style('disabled'))
            return text
        name = self._body_style(row)
        text = Text(body, style=self.get_rich_style(name))
        if self.definitions.get_row_style(name).centered:
            return Align.center(text)
        return text

    def render_rows(self, view: RenderedView, skip_live_input: bool = True) -> List[str]:
        """
        Render the view to a list of ANSI lines.

        With `skip_live_input`, the INPUT row of an enabled field is left out
        so the editor can draw it.
        """
        console = Console(
            force_terminal=True,
            color_system="truecolor",
            file=StringIO(),
            highlight=False,
            width=self._width()
        )
        field = view.input_field
        with console.capture() as capture:
            for row in view.rows:
                if (skip_live_input and row.kind is RowKind.INPUT
                        and field is not None and not field.disabled):
                    continue
                console.print(self.row_renderable(row, field), soft_wrap=False)
        rendered = capture.get()
        return rendered.rstrip("\n").split("\n") if rendered else []

    def render_error(self, message: str) -> str:
        console = Console(force_terminal=True, color_system="truecolor",
                          file=StringIO(), highlight=False, width=self._width())
        with console.capture() as capture:
            console.print(Text(message, style=self.get_rich_style('error')), end="")
        return capture.get()
