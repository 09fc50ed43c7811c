# interface.py

from typing import Optional

from .config import ClientConfig
from .display import Display
from .logger import Logger
from .remote import RemoteTerminal
from .session import TerminalSession
from .typeset import make_typesetter

class Interface:
    """
    Main entry point that assembles our Display, RemoteTerminal, and TerminalSession.
    """

    def __init__(self, endpoint: Optional[str] = None,
                 config: Optional[ClientConfig] = None,
                 logging_enabled: bool = False,
                 log_file: Optional[str] = None):
        """
        Initialize components with an optional endpoint, config and logging.

        Args:
            endpoint: Base URL of the remote terminal. Overrides config.endpoint.
            config: Full client configuration. Defaults are used when omitted.
            logging_enabled: Enable detailed logging.
            log_file: Path to log file. Use "-" for stdout.
        """
        self.config = config or ClientConfig(
            logging_enabled=logging_enabled,
            log_file=log_file
        )
        if endpoint:
            self.config.endpoint = endpoint.rstrip('/')
        self.config.validate()
        self._init_components()

    def _init_components(self) -> None:
        try:
            self.logger = Logger(__name__, self.config.logging_enabled, self.config.log_file)

            typesetter = make_typesetter(self.config.math)
            self.display = Display(logger=self.logger, typesetter=typesetter)
            self.client = RemoteTerminal(self.config, logger=self.logger)

            self.session = TerminalSession(
                display=self.display,
                client=self.client,
                typesetter=typesetter,
                poll_interval=self.config.poll_interval,
                stop_when_finished=self.config.stop_when_finished,
                logger=self.logger
            )

            self.display.terminal.reset()
            self.logger.debug(f"Initialized with endpoint: {self.config.endpoint}")

        except Exception as e:
            if hasattr(self, 'logger'):
                self.logger.error(f"Init error: {e}")
            raise

    def start(self) -> None:
        """Poll the remote terminal and serve its input requests until interrupted."""
        self.session.start()
