from foodcart.services.notification_service import NotificationService


def test_history_is_bounded():
    notifier = NotificationService(history=2)

    notifier.success("one")
    notifier.error("two")
    notifier.success("three")

    assert [n.message for n in notifier.recent()] == ["two", "three"]


def test_drain_empties_queue():
    notifier = NotificationService()
    notifier.error("Failed to clear cart")

    drained = notifier.drain()

    assert [(n.level, n.message) for n in drained] == [("error", "Failed to clear cart")]
    assert notifier.recent() == []
