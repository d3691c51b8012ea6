"""Unit tests for ChangeNotifier."""

import threading

from historyblock.core.blocking.notifier import ChangeNotifier


class TestChangeNotifierSubscriptions:
    """Tests for subscribe()/unsubscribe()."""

    def test_subscribe_once(self):
        notifier = ChangeNotifier(synchronous=True)
        received = []
        notifier.subscribe(received.append)
        notifier.subscribe(received.append)
        assert notifier.subscriber_count() == 1

    def test_unsubscribe(self):
        notifier = ChangeNotifier(synchronous=True)
        received = []
        notifier.subscribe(received.append)
        notifier.unsubscribe(received.append)
        notifier.publish("blacklistUpdated")
        assert received == []

    def test_unsubscribe_unknown_is_noop(self):
        notifier = ChangeNotifier()
        notifier.unsubscribe(print)
        assert notifier.subscriber_count() == 0


class TestChangeNotifierPublish:
    """Tests for publish()."""

    def test_synchronous_delivery(self):
        notifier = ChangeNotifier(synchronous=True)
        received = []
        notifier.subscribe(received.append)
        notifier.publish("blacklistUpdated")
        assert received == ["blacklistUpdated"]

    def test_publish_without_subscribers(self):
        ChangeNotifier().publish("blacklistUpdated")

    def test_failing_subscriber_does_not_reach_publisher(self):
        notifier = ChangeNotifier(synchronous=True)
        received = []

        def broken(action):
            raise RuntimeError("boom")

        notifier.subscribe(broken)
        notifier.subscribe(received.append)
        notifier.publish("blacklistUpdated")
        assert received == ["blacklistUpdated"]

    def test_asynchronous_publish_does_not_block(self):
        notifier = ChangeNotifier()
        release = threading.Event()
        delivered = threading.Event()

        def slow(action):
            release.wait(timeout=5)
            delivered.set()

        notifier.subscribe(slow)
        notifier.publish("blacklistUpdated")

        # publish returned while the subscriber is still blocked
        assert not delivered.is_set()

        release.set()
        notifier.wait_idle(timeout=5)
        assert delivered.is_set()

    def test_asynchronous_delivery_runs_off_thread(self):
        notifier = ChangeNotifier()
        threads = []
        notifier.subscribe(lambda action: threads.append(threading.current_thread().name))
        notifier.publish("blacklistUpdated")
        notifier.wait_idle(timeout=5)
        assert threads == ["notify-blacklistUpdated"]


class TestChangeNotifierRevision:
    """Tests for the published revision counter."""

    def test_revision_starts_at_zero(self):
        notifier = ChangeNotifier()
        assert notifier.revision == 0
        assert notifier.last_action is None

    def test_revision_counts_publishes_without_subscribers(self):
        notifier = ChangeNotifier()
        notifier.publish("blacklistUpdated")
        notifier.publish("blacklistUpdated")
        assert notifier.revision == 2
        assert notifier.last_action == "blacklistUpdated"
