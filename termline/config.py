# config.py

import os
from dataclasses import dataclass, fields
from typing import Optional, Dict, Any

from .errors import ConfigError

DEFAULT_ENDPOINT = "http://127.0.0.1:8080"
ENDPOINT_ENV_VAR = "TERMLINE_ENDPOINT"
MATH_MODES = ("unicode", "queued", "off")


@dataclass
class ClientConfig:
    """
    Settings for a termline client session.

    Fields map one-to-one onto the command line flags in cli.py.
    """
    endpoint: str = ""
    poll_interval: float = 0.3
    state_path: str = "/api/state"
    validate_path: str = "/api/validate"
    submit_path: str = "/api/input"
    timeout: float = 30.0
    stop_when_finished: bool = False
    math: str = "unicode"
    logging_enabled: bool = False
    log_file: Optional[str] = None

    def __post_init__(self):
        if not self.endpoint:
            self.endpoint = os.environ.get(ENDPOINT_ENV_VAR, DEFAULT_ENDPOINT)
        self.endpoint = self.endpoint.rstrip('/')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClientConfig":
        """Build a config from a dictionary, ignoring unknown keys and None values."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known and v is not None})

    def validate(self) -> "ClientConfig":
        if not self.endpoint.startswith(("http://", "https://")):
            raise ConfigError(f"endpoint must be an http(s) URL, got {self.endpoint!r}")
        if self.poll_interval <= 0:
            raise ConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if self.math not in MATH_MODES:
            raise ConfigError(f"math must be one of {', '.join(MATH_MODES)}, got {self.math!r}")
        return self

    def url(self, path: str) -> str:
        return f"{self.endpoint}/{path.lstrip('/')}"
