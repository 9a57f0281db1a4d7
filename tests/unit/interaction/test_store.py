"""Unit tests for the selection store."""

from unittest.mock import MagicMock

from lineage_view.core.types import Node
from lineage_view.interaction.store import ObservableValue, SelectionStore


class TestSelectionStore:
    def test_initial_state(self):
        store = SelectionStore()
        assert store.get_node() is None
        assert store.get_fullscreen() is False
        assert SelectionStore(fullscreen=True).get_fullscreen() is True

    def test_set_notifies_each_subscriber_once(self):
        store = SelectionStore()
        first, second = MagicMock(), MagicMock()
        store.subscribe(first)
        store.subscribe(second)

        node = Node(name="dep2")
        store.set_node(node)

        first.assert_called_once_with(node)
        second.assert_called_once_with(node)
        assert store.get_node() is node

    def test_late_subscriber_sees_only_later_changes(self):
        store = SelectionStore()
        store.set_node(Node(name="a"))

        late = MagicMock()
        store.subscribe(late)
        late.assert_not_called()

        store.set_node(None)
        late.assert_called_once_with(None)
        assert store.get_node() is None

    def test_subscriber_added_during_notification(self):
        store = SelectionStore()
        added = MagicMock()
        store.subscribe(lambda node: store.subscribe(added))

        store.set_node(Node(name="a"))
        added.assert_not_called()

    def test_unsubscribe(self):
        store = SelectionStore()
        subscriber = MagicMock()
        unsubscribe = store.subscribe(subscriber)
        unsubscribe()
        unsubscribe()

        store.set_node(Node(name="a"))
        subscriber.assert_not_called()

    def test_fullscreen_toggle(self):
        store = SelectionStore()
        seen = []
        store.subscribe_fullscreen(seen.append)
        on_node = MagicMock()
        store.subscribe(on_node)

        store.set_fullscreen(lambda fs: not fs)
        store.set_fullscreen(lambda fs: not fs)
        store.set_fullscreen(True)

        assert seen == [True, False, True]
        on_node.assert_not_called()

    def test_close_drops_subscribers(self):
        store = SelectionStore()
        store.subscribe(MagicMock())
        store.subscribe_fullscreen(MagicMock())
        store.set_node(Node(name="a"))
        assert store.subscriber_count == 2

        store.close()
        assert store.subscriber_count == 0
        assert store.get_node() is None

    def test_stores_are_independent(self):
        a, b = SelectionStore(), SelectionStore()
        a.set_node(Node(name="x"))
        assert b.get_node() is None


class TestObservableValue:
    def test_nested_set_supersedes_outer_delivery(self):
        value = ObservableValue("initial")
        first_seen, second_seen = [], []

        def first(v):
            first_seen.append(v)
            if v == "a":
                value.set("b")

        value.subscribe(first)
        value.subscribe(second_seen.append)
        value.set("a")

        assert first_seen == ["a", "b"]
        assert second_seen == ["b"]
        assert value.get() == "b"
