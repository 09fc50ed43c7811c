# display/editor.py

import asyncio
from typing import Callable, Optional, Set

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import ANSI, FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.styles import Style


class FieldEditor:
    """
    Edits the mounted input field with a prompt_toolkit prompt.

    Enter does not end the prompt: it hands the value to `on_commit` and
    keeps the prompt alive, so a rejected value can be corrected in place.
    The prompt only ends when the view is repainted or the field is disabled.
    """

    def __init__(self, style, logger=None):
        self.style = style
        self.logger = logger
        self.field = None
        self.on_change: Optional[Callable[[str], None]] = None
        self.on_commit: Optional[Callable] = None
        self.on_interrupt: Optional[Callable[[], None]] = None
        self._session: Optional[PromptSession] = None
        self._task: Optional[asyncio.Task] = None
        self._commits: Set[asyncio.Future] = set()

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def _key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("enter")
        def _(event):
            self._commit()

        return kb

    def _commit(self) -> None:
        if not self.on_commit:
            return
        commit = asyncio.ensure_future(self.on_commit())
        self._commits.add(commit)
        commit.add_done_callback(self._commit_done)

    def _commit_done(self, commit: asyncio.Future) -> None:
        self._commits.discard(commit)
        if not commit.cancelled() and commit.exception() is not None and self.logger:
            self.logger.error(f"Commit error: {commit.exception()}")

    def _text_changed(self, buffer) -> None:
        if self.on_change:
            self.on_change(buffer.text)

    def _toolbar(self):
        field = self.field
        if field is None or not field.error:
            return ""
        return ANSI(self.style.render_error(field.error))

    async def attach(self, field) -> None:
        """Start editing `field`, seeded with its current value."""
        await self.detach()
        self.field = field
        session = PromptSession(
            key_bindings=self._key_bindings(),
            complete_while_typing=False,
            style=Style.from_dict({'bottom-toolbar': 'noreverse', 'prompt': 'bold'})
        )
        session.default_buffer.on_text_changed += self._text_changed
        self._session = session
        self._task = asyncio.create_task(self._run(session, field))

    async def _run(self, session: PromptSession, field) -> None:
        try:
            await session.prompt_async(
                FormattedText([("class:prompt", f"{field.prompt} ")]),
                default=field.value,
                bottom_toolbar=self._toolbar,
            )
        except (KeyboardInterrupt, EOFError):
            if self.on_interrupt:
                self.on_interrupt()

    def sync(self, field) -> None:
        """Push field changes (cleared value, error overlay) into the live prompt."""
        if field is not self.field or self._session is None:
            return
        buffer = self._session.default_buffer
        if buffer.text != field.value:
            buffer.text = field.value
            buffer.cursor_position = len(field.value)
        app = self._session.app
        if app.is_running:
            app.invalidate()

    async def detach(self) -> None:
        """Stop editing; the prompt is cancelled and its field forgotten."""
        task, self._task = self._task, None
        self.field = None
        self._session = None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def close(self) -> None:
        await self.detach()
        if self._commits:
            await asyncio.gather(*self._commits, return_exceptions=True)
