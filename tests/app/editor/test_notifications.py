from resume_builder.app.editor.notifications import (
    Notification,
    NotificationLevel,
    Notifier,
)


def test_notifier_collects_in_order():
    notifier = Notifier()

    notifier.success("saved")
    notifier.error("failed")

    assert notifier.pending == [
        Notification(level=NotificationLevel.SUCCESS, message="saved"),
        Notification(level=NotificationLevel.ERROR, message="failed"),
    ]


def test_drain_clears_pending():
    notifier = Notifier()
    notifier.success("saved")

    drained = notifier.drain()

    assert [n.message for n in drained] == ["saved"]
    assert notifier.pending == []
    assert notifier.drain() == []


def test_pending_returns_copy():
    notifier = Notifier()
    notifier.pending.append(Notification(level=NotificationLevel.ERROR, message="x"))

    assert notifier.pending == []
