"""Notification dispatch with a recorded per-channel status."""

import logging
from dataclasses import dataclass
from typing import Iterable

from agenda.domain.notification import Notification, NotificationChannel, NotificationStatus
from agenda.domain.ports import Clock, IdGenerator, NotificationStore
from agenda.notifications.senders import SenderRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationResult:
    id: str
    channel: NotificationChannel
    status: NotificationStatus


class NotificationService:
    def __init__(
        self,
        store: NotificationStore,
        senders: SenderRegistry,
        clock: Clock,
        ids: IdGenerator,
    ):
        self.store = store
        self.senders = senders
        self.clock = clock
        self.ids = ids

    def send(
        self,
        recipient_id: str,
        message: str,
        channels: Iterable[NotificationChannel],
    ) -> list[NotificationResult]:
        """
        Record and send ``message`` on every channel.

        A channel that fails to send is marked FAILED and logged. A
        channel whose record cannot be written is logged and reported
        FAILED. Either way the remaining channels are still attempted.
        """
        results: list[NotificationResult] = []

        for channel in channels:
            notification = Notification(
                id=self.ids.next(),
                recipient_id=recipient_id,
                channel=channel,
                message=message,
                created_at=self.clock.now(),
            )

            try:
                status = self._deliver(notification)
            except Exception:
                logger.exception('Recording %s notification %s failed', channel.value, notification.id)
                status = NotificationStatus.FAILED

            results.append(NotificationResult(id=notification.id, channel=channel, status=status))

        return results

    def _deliver(self, notification: Notification) -> NotificationStatus:
        saved = self.store.insert(notification)

        try:
            self.senders.get_sender(saved.channel).send(saved)
        except Exception:
            logger.exception('Sending %s notification %s failed', saved.channel.value, saved.id)
            status = NotificationStatus.FAILED
        else:
            status = NotificationStatus.SENT

        return self.store.update_status(saved.id, status).status
