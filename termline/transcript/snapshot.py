# transcript/snapshot.py

from dataclasses import dataclass, field
from typing import List


@dataclass
class TranscriptSnapshot:
    """
    One poll result from the remote terminal.

    The server always sends the full transcript; only `output` drives
    reconciliation. `pending_inputs` and `program_finished` are status
    fields reported alongside it.
    """
    output: List[str] = field(default_factory=list)
    pending_inputs: List[str] = field(default_factory=list)
    program_finished: bool = False

    def __len__(self) -> int:
        return len(self.output)

    @classmethod
    def from_dict(cls, data: dict) -> "TranscriptSnapshot":
        """Rebuild a snapshot from the state endpoint body, ignoring unknown keys."""
        output = data.get("output") or []
        pending = data.get("pending_inputs") or []
        return cls(
            output=[str(line) for line in output],
            pending_inputs=[str(request_id) for request_id in pending],
            program_finished=bool(data.get("program_finished", False))
        )
