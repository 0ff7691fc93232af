"""Notification messages pushed to channel subscribers.

One Notification describes one committed create/update/delete of one
entity instance. It is built by the service right after the commit,
serialized once per broadcast and thrown away after delivery.

Wire format (JSON text frame):

    {"entity": "Product", "type": "CREATE", "data": {...}, "created_at": "..."}
"""

import enum
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

# Entity tags, also used as channel names
PRODUCT = "Product"
CATEGORY = "Category"
SUPPLIERS = "Suppliers"
EMPLOYEE = "Employee"
CLIENT = "Client"


class NotificationType(str, enum.Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class Notification(BaseModel):
    """Immutable record of one entity mutation."""

    entity: str
    type: NotificationType
    data: dict[str, Any]
    created_at: str = Field(default_factory=_now_iso)

    model_config = {"frozen": True}

    def to_json(self) -> str:
        return self.model_dump_json()
