# display/terminal.py
import sys
import shutil
import asyncio
from dataclasses import dataclass
from typing import List


@dataclass
class TerminalSize:
    """Terminal dimensions."""

    columns: int
    lines: int


class DisplayTerminal:
    """Low-level terminal operations and output."""

    def __init__(self):
        """Initialize terminal state."""
        self._cursor_visible = True
        # ANSI escape codes for text formatting
        self._reset_style = "\033[0m"  # Reset all attributes
        # Screen buffer for smoother rendering
        self._current_buffer = ""
        self._last_size = self.get_size()

    @property
    def width(self) -> int:
        """Return terminal width."""
        return self.get_size().columns

    @property
    def height(self) -> int:
        """Return terminal height."""
        return self.get_size().lines

    def get_size(self) -> TerminalSize:
        """Get terminal dimensions."""
        size = shutil.get_terminal_size()
        return TerminalSize(columns=size.columns, lines=size.lines)

    def _is_terminal(self) -> bool:
        """Return True if stdout is a terminal."""
        return sys.stdout.isatty()

    def _manage_cursor(self, show: bool) -> None:
        """Toggle cursor visibility based on 'show' flag."""
        if self._cursor_visible != show and self._is_terminal():
            self._cursor_visible = show
            sys.stdout.write("\033[?25h" if show else "\033[?25l")
            sys.stdout.flush()

    def show_cursor(self) -> None:
        self._manage_cursor(True)

    def hide_cursor(self) -> None:
        self._manage_cursor(False)

    def reset(self) -> None:
        """Reset terminal: show cursor and clear screen."""
        self.show_cursor()
        self.clear_screen()

    def clear_screen(self) -> None:
        """Clear the terminal screen and reset cursor position."""
        if self._is_terminal():
            sys.stdout.write("\033[2J\033[H")
            sys.stdout.flush()
        self._current_buffer = ""

    def visible_tail(self, lines: List[str], reserved: int = 0) -> List[str]:
        """Return the last lines that fit on screen, leaving `reserved` rows free."""
        room = max(self.height - reserved, 1)
        return lines[-room:]

    async def update_display(self, lines: List[str], reserved: int = 0) -> None:
        """
        Repaint the screen with `lines`, scrolled to the end.
        Uses double-buffering approach to minimize flicker.
        """
        self.hide_cursor()
        new_buffer = self._reset_style + "\n".join(self.visible_tail(lines, reserved))
        if lines:
            new_buffer += "\n"
        current_size = self.get_size()
        if (
            current_size.columns != self._last_size.columns
            or current_size.lines != self._last_size.lines
        ):
            # Terminal size changed, do a full clear
            self.clear_screen()
            self._last_size = current_size
        else:
            sys.stdout.write("\033[H")
        sys.stdout.write(new_buffer)
        # Erase from cursor to end of screen
        sys.stdout.write("\033[0J")
        sys.stdout.flush()
        self._current_buffer = new_buffer
        await self.yield_to_event_loop()

    async def yield_to_event_loop(self) -> None:
        """Yield control to the event loop briefly."""
        await asyncio.sleep(0)
