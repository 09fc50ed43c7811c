# __init__.py

from .config import ClientConfig
from .errors import TermlineError, TransportError, ConfigError
from .logger import Logger
from .interface import Interface

__all__ = ["Interface", "Logger", "ClientConfig", "TermlineError", "TransportError", "ConfigError"]
