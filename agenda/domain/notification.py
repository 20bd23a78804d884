"""Notification entity and its channel/status enums."""

import enum
from dataclasses import dataclass
from datetime import datetime


class NotificationChannel(str, enum.Enum):
    EMAIL = 'EMAIL'
    SMS = 'SMS'
    PUSH = 'PUSH'
    WHATSAPP = 'WHATSAPP'


class NotificationStatus(str, enum.Enum):
    PENDING = 'PENDING'
    SENT = 'SENT'
    FAILED = 'FAILED'


@dataclass(frozen=True)
class Notification:
    id: str
    recipient_id: str
    channel: NotificationChannel
    message: str
    created_at: datetime
    status: NotificationStatus = NotificationStatus.PENDING
