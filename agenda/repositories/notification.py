"""Notification store backed by the ``notifications`` table."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agenda.domain.notification import Notification, NotificationChannel, NotificationStatus
from agenda.models.notification import Notification as NotificationRow
from agenda.repositories.appointment import from_storage, to_storage


def to_domain(row: NotificationRow) -> Notification:
    return Notification(
        id=row.id,
        recipient_id=row.recipient_id,
        channel=NotificationChannel(row.channel),
        message=row.message,
        created_at=from_storage(row.created_at),
        status=NotificationStatus(row.status),
    )


class SqlNotificationStore:
    def __init__(self, db: Session):
        self.db = db

    def insert(self, notification: Notification) -> Notification:
        row = NotificationRow(
            id=notification.id,
            recipient_id=notification.recipient_id,
            channel=notification.channel.value,
            message=notification.message,
            status=notification.status.value,
            created_at=to_storage(notification.created_at),
        )
        try:
            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        self.db.refresh(row)
        return to_domain(row)

    def update_status(self, notification_id: str, status: NotificationStatus) -> Notification:
        row = self.db.query(NotificationRow).filter(NotificationRow.id == notification_id).one()
        row.status = status.value
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        self.db.refresh(row)
        return to_domain(row)

    def find_by_recipient(self, recipient_id: str) -> list[Notification]:
        rows = self.db.query(NotificationRow).filter(
            NotificationRow.recipient_id == recipient_id,
        ).order_by(NotificationRow.created_at.asc()).all()

        return [to_domain(row) for row in rows]
