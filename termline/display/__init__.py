# display/__init__.py

import asyncio
from typing import Optional, Set

from .terminal import DisplayTerminal
from .style import DisplayStyle
from .editor import FieldEditor

class Display:
    """
    Coordinates terminal display components in a hierarchical structure.

    Component Hierarchy:
    DisplayTerminal (base) → DisplayStyle → FieldEditor
    """
    def __init__(self, logger=None, typesetter=None):
        """Initialize components in dependency order."""
        self.logger = logger
        self.typesetter = typesetter
        self.terminal = DisplayTerminal()
        self.style = DisplayStyle(terminal=self.terminal)
        self.editor = FieldEditor(self.style, logger=logger)
        self._view = None
        self._lock = asyncio.Lock()
        self._repaints: Set[asyncio.Future] = set()

    def bind(self, on_change, on_commit, on_interrupt=None) -> None:
        """Route field edits and commits to the input lifecycle."""
        self.editor.on_change = on_change
        self.editor.on_commit = on_commit
        self.editor.on_interrupt = on_interrupt

    def render(self, view) -> None:
        """Show `view`, replacing whatever is on screen."""
        self._view = view
        self._schedule_repaint()

    def refresh(self) -> None:
        """Reflect field state changes, repainting only when the field is no longer live."""
        if self._view is None:
            return
        field = self._view.input_field
        if field is not None and not field.disabled and self.editor.field is field:
            self.editor.sync(field)
        else:
            self._schedule_repaint()

    def _schedule_repaint(self) -> None:
        repaint = asyncio.ensure_future(self.repaint())
        self._repaints.add(repaint)
        repaint.add_done_callback(self._repaint_done)

    def _repaint_done(self, repaint: asyncio.Future) -> None:
        self._repaints.discard(repaint)
        if not repaint.cancelled() and repaint.exception() is not None and self.logger:
            self.logger.error(f"Repaint error: {repaint.exception()}")

    async def repaint(self) -> None:
        async with self._lock:
            view = self._view
            if view is None:
                return
            field = view.input_field
            live = field is not None and not field.disabled
            await self.editor.detach()
            drain = getattr(self.typesetter, 'drain', None)
            if callable(drain):
                drain()
            lines = self.style.render_rows(view)
            # Leave room for the prompt line and its error toolbar
            await self.terminal.update_display(lines, reserved=2 if live else 0)
            if live:
                await self.editor.attach(field)

    async def close(self) -> None:
        if self._repaints:
            await asyncio.gather(*self._repaints, return_exceptions=True)
        await self.editor.close()

__all__ = ['Display', 'DisplayTerminal', 'DisplayStyle', 'FieldEditor']
