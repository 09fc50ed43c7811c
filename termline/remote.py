# remote.py

import httpx
import json
from dataclasses import dataclass
from typing import Optional, Dict, Any

from .errors import TransportError
from .transcript import TranscriptSnapshot


@dataclass
class ValidationResult:
    """Server verdict on a candidate value."""
    valid: bool
    error: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidationResult":
        return cls(valid=bool(data.get("valid", False)), error=data.get("error"))


class RemoteTerminal:
    """Client for the remote terminal's state, validate and input endpoints."""

    def __init__(self, config, logger=None, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.logger = logger
        self._last_error: Optional[str] = None
        self.client = client or httpx.AsyncClient(timeout=config.timeout)
        if self.logger:
            self.logger.debug(f"Initialized remote terminal: {self.config.endpoint}")

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    async def _request(self, operation: str, method: str, path: str,
                       payload: Optional[Dict[str, Any]] = None) -> httpx.Response:
        """Issue one request, translating every httpx failure into TransportError."""
        url = self.config.url(path)
        try:
            response = await self.client.request(method, url, json=payload)
            response.raise_for_status()
            return response

        except httpx.TimeoutException as e:
            if self.logger:
                self.logger.error(f"{operation} timeout: {str(e)}")
            self._last_error = "Timeout"
            raise TransportError(operation, "Request timed out") from e

        except httpx.HTTPStatusError as e:
            error_msg = f"HTTP {e.response.status_code}"
            if self.logger:
                self.logger.error(f"{operation} {error_msg}: {str(e)}")
            self._last_error = error_msg
            raise TransportError(operation, error_msg, e.response.status_code) from e

        except httpx.RequestError as e:
            if self.logger:
                self.logger.error(f"{operation} connection error: {str(e)}")
            self._last_error = "Connection error"
            raise TransportError(operation, "Failed to connect") from e

    def _decode(self, operation: str, response: httpx.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            if self.logger:
                self.logger.error(f"Failed to decode {operation} response: {str(e)}")
            self._last_error = "Decode error"
            raise TransportError(operation, "Invalid JSON body") from e
        if not isinstance(data, dict):
            self._last_error = "Decode error"
            raise TransportError(operation, "Expected a JSON object")
        return data

    async def fetch_state(self) -> TranscriptSnapshot:
        response = await self._request("state", "GET", self.config.state_path)
        snapshot = TranscriptSnapshot.from_dict(self._decode("state", response))
        if self.logger:
            self.logger.debug(f"Fetched transcript: {len(snapshot)} lines")
        return snapshot

    async def validate(self, request_id: str, value: str) -> ValidationResult:
        response = await self._request(
            "validate", "POST", self.config.validate_path,
            {"id": request_id, "value": value}
        )
        return ValidationResult.from_dict(self._decode("validate", response))

    async def submit(self, request_id: str, value: str) -> None:
        # Acknowledgement body is ignored
        await self._request(
            "submit", "POST", self.config.submit_path,
            {"id": request_id, "value": value}
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit - ensures proper client cleanup."""
        if self.client:
            await self.client.aclose()
