"""Base models shared across the ledger."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Event:
    """Standard event envelope for the movement feed."""

    event_id: str
    event_type: str  # entity.action (e.g., wallet.transferred)
    event_time: datetime
    source: str  # Service/system that generated
    subject: str  # Wallet ID affected
    data: dict
    metadata: dict = field(default_factory=dict)
