from sqlalchemy.exc import OperationalError

from agenda.domain.notification import NotificationChannel, NotificationStatus
from agenda.notifications.senders import LoggingSender, SenderRegistry, build_default_registry
from agenda.repositories.notification import SqlNotificationStore
from agenda.services.notifications import NotificationService


class RecordingSender:
    def __init__(self):
        self.sent = []

    def send(self, notification) -> None:
        self.sent.append(notification)


class FailingSender:
    def send(self, notification) -> None:
        raise TimeoutError('gateway timeout')


def test_send_records_sent_status_per_channel(db, clock, ids) -> None:
    email = RecordingSender()
    push = RecordingSender()
    service = NotificationService(
        SqlNotificationStore(db),
        SenderRegistry({NotificationChannel.EMAIL: email, NotificationChannel.PUSH: push}),
        clock,
        ids,
    )

    results = service.send('client-1', 'Appointment scheduled', [NotificationChannel.EMAIL, NotificationChannel.PUSH])

    assert [(result.channel, result.status) for result in results] == [
        (NotificationChannel.EMAIL, NotificationStatus.SENT),
        (NotificationChannel.PUSH, NotificationStatus.SENT),
    ]
    assert email.sent[0].message == 'Appointment scheduled'
    assert email.sent[0].status == NotificationStatus.PENDING
    assert push.sent[0].recipient_id == 'client-1'


def test_failing_channel_is_marked_failed_and_others_still_sent(db, clock, ids, caplog) -> None:
    store = SqlNotificationStore(db)
    service = NotificationService(
        store,
        SenderRegistry({NotificationChannel.SMS: FailingSender(), NotificationChannel.EMAIL: RecordingSender()}),
        clock,
        ids,
    )

    results = service.send('client-1', 'hello', [NotificationChannel.SMS, NotificationChannel.EMAIL])

    assert [result.status for result in results] == [NotificationStatus.FAILED, NotificationStatus.SENT]
    assert {item.status for item in store.find_by_recipient('client-1')} == {
        NotificationStatus.FAILED,
        NotificationStatus.SENT,
    }
    assert 'Sending SMS notification' in caplog.text


def test_channel_without_sender_is_marked_failed(db, clock, ids) -> None:
    service = NotificationService(SqlNotificationStore(db), SenderRegistry({}), clock, ids)

    results = service.send('client-1', 'hello', [NotificationChannel.WHATSAPP])

    assert results[0].status == NotificationStatus.FAILED


def test_default_registry_covers_every_channel() -> None:
    registry = build_default_registry()

    for channel in NotificationChannel:
        assert isinstance(registry.get_sender(channel), LoggingSender)


class FlakyStore:
    def __init__(self, store, failing_channel):
        self.store = store
        self.failing_channel = failing_channel

    def insert(self, notification):
        if notification.channel == self.failing_channel:
            raise OperationalError('INSERT INTO notifications', {}, ConnectionError('connection reset'))
        return self.store.insert(notification)

    def update_status(self, notification_id, status):
        return self.store.update_status(notification_id, status)


def test_unrecorded_channel_is_failed_and_others_still_sent(db, clock, ids, caplog) -> None:
    store = SqlNotificationStore(db)
    email = RecordingSender()
    service = NotificationService(
        FlakyStore(store, NotificationChannel.SMS),
        SenderRegistry({NotificationChannel.SMS: RecordingSender(), NotificationChannel.EMAIL: email}),
        clock,
        ids,
    )

    results = service.send('client-1', 'hello', [NotificationChannel.SMS, NotificationChannel.EMAIL])

    assert [result.status for result in results] == [NotificationStatus.FAILED, NotificationStatus.SENT]
    assert [item.channel for item in store.find_by_recipient('client-1')] == [NotificationChannel.EMAIL]
    assert len(email.sent) == 1
    assert 'Recording SMS notification' in caplog.text
