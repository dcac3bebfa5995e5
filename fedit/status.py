"""Short-lived status bar messages."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

FRESH_SECONDS = 3.0


@dataclass
class Status:
    """A message shown in the status bar for a few seconds."""

    text: str
    timestamp: float = field(default_factory=time.monotonic)

    def is_fresh(self) -> bool:
        """Whether the message is still recent enough to display."""
        return time.monotonic() - self.timestamp < FRESH_SECONDS