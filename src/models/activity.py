"""Recent-activity entries shown on the dashboard feed."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

ActivityKind = Literal["create", "update", "delete", "check"]


@dataclass(frozen=True)
class ActivityEntry:
    kind: ActivityKind
    message: str
    timestamp: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:6])
