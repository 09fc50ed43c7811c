# session/__init__.py

import asyncio

from .state import (
    InputField,
    InputPhase,
    OpenInputRequest,
    RenderedView,
    Row,
    RowKind,
    ViewState,
)
from .reconciler import DisplayReconciler
from .lifecycle import InputLifecycle
from .scheduler import PollScheduler


class TerminalSession:
    """
    Coordinates session components around one ViewState.

    Exposes only the public methods 'run' and 'start'.
    """
    def __init__(self, display, client, typesetter=None, poll_interval: float = 0.3,
                 stop_when_finished: bool = False, logger=None):
        self.display = display
        self.client = client
        self.logger = logger
        self.state = ViewState()
        self.reconciler = DisplayReconciler(display, typesetter, logger)
        self.lifecycle = InputLifecycle(self.state, client, display, logger)
        self.scheduler = PollScheduler(
            self.state, client, self.reconciler,
            poll_interval=poll_interval,
            stop_when_finished=stop_when_finished,
            logger=logger
        )
        if self.display:
            self.display.bind(on_change=self.lifecycle.on_keystroke,
                              on_commit=self.lifecycle.commit,
                              on_interrupt=self.scheduler.stop)

    async def run(self) -> None:
        try:
            await self.scheduler.run()
        finally:
            if self.display:
                await self.display.close()
            await self.client.aclose()

    def start(self) -> None:
        """Run the session until interrupted."""
        try:
            asyncio.run(self.run())
        except KeyboardInterrupt:
            print("\nExiting...")
        finally:
            if self.display:
                self.display.terminal.reset()


__all__ = [
    'TerminalSession',
    'DisplayReconciler',
    'InputLifecycle',
    'PollScheduler',
    'ViewState',
    'RenderedView',
    'InputField',
    'InputPhase',
    'OpenInputRequest',
    'Row',
    'RowKind',
]
