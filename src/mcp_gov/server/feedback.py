from __future__ import annotations

import json
import logging
import typing as t
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

FEEDBACK_FILENAME = "mcp-feedback.jsonl"
MIN_MESSAGE_CHARS = 5
MAX_MESSAGE_CHARS = 2000


@dataclass(frozen=True)
class Feedback:
    rating: int
    message: str
    query_context: t.Optional[str] = None
    email: t.Optional[str] = None
    received_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def __post_init__(self) -> None:
        if isinstance(self.rating, bool) or not isinstance(self.rating, int) or not 1 <= self.rating <= 5:
            raise ValueError(f"rating must be an integer from 1 to 5, got {self.rating!r}")
        if not MIN_MESSAGE_CHARS <= len(self.message) <= MAX_MESSAGE_CHARS:
            raise ValueError(f"message must be {MIN_MESSAGE_CHARS}-{MAX_MESSAGE_CHARS} characters")
        if self.email is not None and "@" not in self.email.strip("@"):
            raise ValueError(f"email is not a valid address: {self.email!r}")


def record_feedback(directory: t.Union[str, Path], feedback: Feedback) -> Path:
    """Append ``feedback`` as one JSON line to ``<directory>/mcp-feedback.jsonl``."""
    path = Path(directory) / FEEDBACK_FILENAME
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as fh:
        fh.write(json.dumps(asdict(feedback)) + "\n")
    logger.info("feedback recorded rating=%d path=%s", feedback.rating, path)
    return path
