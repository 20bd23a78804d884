"""
Notification senders, one per channel.

Delivery to real providers is outside this service; each sender writes
the message to the log so operators can see what would have gone out.
"""

import logging
from typing import Mapping

from agenda.domain.exceptions import UnknownChannelError
from agenda.domain.notification import Notification, NotificationChannel
from agenda.domain.ports import NotificationSender

logger = logging.getLogger(__name__)


class LoggingSender:
    def __init__(self, label: str):
        self.label = label

    def send(self, notification: Notification) -> None:
        logger.info(
            '[%s] To: %s | %s',
            self.label,
            notification.recipient_id,
            notification.message,
        )


class SenderRegistry:
    def __init__(self, senders: Mapping[NotificationChannel, NotificationSender]):
        self._senders = dict(senders)

    def get_sender(self, channel: NotificationChannel) -> NotificationSender:
        sender = self._senders.get(channel)
        if sender is None:
            raise UnknownChannelError(channel)
        return sender


def build_default_registry() -> SenderRegistry:
    return SenderRegistry({
        NotificationChannel.EMAIL: LoggingSender('EMAIL'),
        NotificationChannel.SMS: LoggingSender('SMS'),
        NotificationChannel.PUSH: LoggingSender('PUSH'),
        NotificationChannel.WHATSAPP: LoggingSender('WHATSAPP'),
    })
