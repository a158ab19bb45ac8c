"""Tests for collection_sync.sync.synchronizer module.

Validates the Synchronizer: construction checks, mode-dependent
subscriptions, relay of every change kind, the relay guard, mapping
failures and recovery, disposal, and stats.

EVERY CHANGE IS RELAYED ONCE.
"""

import logging

import pytest

from collection_sync import create_synchronizer
from collection_sync.config import AddStrategy, SyncConfig, SyncMode
from collection_sync.errors import (
    InvalidArgumentError,
    MappingError,
    SynchronizerDisposedError,
)
from collection_sync.events import ChangeAction
from collection_sync.observables import ObservableList
from collection_sync.sync.synchronizer import RelayDirection, RelayStats, Synchronizer


def times_ten(x):
    return x * 10


def div_ten(x):
    return x // 10


def image(items):
    return [times_ten(x) for x in items]


class TestConstruction:
    """Argument validation and subscription per mode."""

    @pytest.mark.parametrize("missing", ["source", "target", "to_source", "to_target"])
    def test_none_argument_rejected(self, missing):
        source = ObservableList([1])
        target = ObservableList([10])
        kwargs = {
            "source": source,
            "target": target,
            "to_source": div_ten,
            "to_target": times_ten,
        }
        kwargs[missing] = None

        with pytest.raises(InvalidArgumentError) as exc_info:
            Synchronizer(**kwargs)

        assert exc_info.value.argument == missing
        # Nothing was subscribed before the failure
        assert source.handler_count == 0
        assert target.handler_count == 0

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            Synchronizer(None, ObservableList(), div_ten, times_ten)

    def test_non_callable_mapping_rejected(self):
        with pytest.raises(InvalidArgumentError, match="callable"):
            Synchronizer(ObservableList(), ObservableList(), div_ten, "not a function")

    def test_plain_list_rejected(self):
        target = ObservableList()
        with pytest.raises(InvalidArgumentError, match="observable"):
            Synchronizer([1, 2], target, div_ten, times_ten)
        assert target.handler_count == 0

    def test_default_mode_is_two_way(self, source, target):
        sync = Synchronizer(source, target, div_ten, times_ten)
        assert sync.mode is SyncMode.TWO_WAY
        assert source.handler_count == 1
        assert target.handler_count == 1

    def test_one_way_to_target_subscribes_source_only(self, source, target, one_way_to_target):
        assert source.handler_count == 1
        assert target.handler_count == 0

    def test_one_way_to_source_subscribes_target_only(self, source, target):
        Synchronizer(
            source, target, div_ten, times_ten,
            SyncConfig(mode=SyncMode.ONE_WAY_TO_SOURCE),
        )
        assert source.handler_count == 0
        assert target.handler_count == 1

    def test_no_initial_reconciliation(self):
        """Mismatched starting contents are left alone."""
        source = ObservableList([1, 2, 3])
        target = ObservableList(["unrelated"])
        Synchronizer(source, target, div_ten, times_ten)
        assert source == [1, 2, 3]
        assert target == ["unrelated"]

    def test_mode_is_read_only(self, two_way):
        with pytest.raises(AttributeError):
            two_way.mode = SyncMode.ONE_WAY_TO_SOURCE

    def test_properties(self, source, target, two_way):
        assert two_way.source is source
        assert two_way.target is target
        assert two_way.is_relaying is False
        assert two_way.is_disposed is False


class TestScenario:
    """End-to-end walk-through from [1, 2, 3] with x * 10."""

    def test_append_remove_clear(self, source, target, two_way):
        source.extend([4])
        assert target == [10, 20, 30, 40]

        source.remove_range(1, 1)
        assert source == [1, 3, 4]
        assert target == [10, 30, 40]

        source.clear()
        assert target == []

        source.extend([7])
        assert target == [70]


class TestRelayToTarget:
    """Source changes reproduced on the target."""

    def test_add_appends_mapped_items(self, source, target, two_way):
        source.extend([4, 5])
        assert target == [10, 20, 30, 40, 50]

    def test_insert_appends_by_default(self, source, target, two_way):
        """Mid-list inserts land at the end of the target."""
        source.insert(0, 0)
        assert source == [0, 1, 2, 3]
        assert target == [10, 20, 30, 0]

    def test_insert_at_mirrored_index(self):
        source = ObservableList([1, 2, 3])
        target = ObservableList([10, 20, 30])
        Synchronizer(
            source, target, div_ten, times_ten,
            SyncConfig(add_strategy=AddStrategy.MIRROR_INDEX),
        )
        source.insert_range(1, [5, 6])
        assert target == [10, 50, 60, 20, 30]

    def test_mirrored_index_clamped_to_target_length(self):
        source = ObservableList([1, 2, 3])
        target = ObservableList([10])
        Synchronizer(
            source, target, div_ten, times_ten,
            SyncConfig(add_strategy="mirror_index"),
        )
        source.append(4)
        assert target == [10, 40]

    def test_remove(self, source, target, two_way):
        del source[0]
        assert target == [20, 30]

    def test_replace(self, source, target, two_way):
        source[1] = 9
        assert target == [10, 90, 30]

    def test_replace_range_changes_length(self, source, target, two_way):
        source.replace_range(0, 2, [7, 8, 9])
        assert source == [7, 8, 9, 3]
        assert target == [70, 80, 90, 30]

    def test_single_move(self, source, target, two_way):
        source.move(0, 2)
        assert source == [2, 3, 1]
        assert target == [20, 30, 10]

    def test_range_move_carries_items_unchanged(self):
        """Multi-item moves reuse the target's own elements."""
        calls = []

        def to_target(x):
            calls.append(x)
            return x * 10

        source = ObservableList([1, 2, 3, 4])
        target = ObservableList([10, 20, 30, 40])
        Synchronizer(source, target, div_ten, to_target)

        source.move_range(0, 2, 2)
        assert source == [3, 4, 1, 2]
        assert target == [30, 40, 10, 20]
        assert calls == []

    def test_reset_rebuilds_from_source(self, source, target, two_way):
        source.reset([5, 6])
        assert target == [50, 60]

    def test_reset_preserves_order(self):
        source = ObservableList()
        target = ObservableList(["stale"])
        Synchronizer(source, target, str.lower, str.upper)
        source.reset(["a", "b", "c"])
        assert target == ["A", "B", "C"]

    def test_mixed_sequence_keeps_image(self, source, target, two_way):
        """After every add/remove/replace/reset the target is the image."""
        steps = [
            lambda: source.append(4),
            lambda: source.extend([5, 6]),
            lambda: source.remove_range(0, 2),
            lambda: source.replace_range(1, 2, [8]),
            lambda: source.__setitem__(0, 2),
            lambda: source.pop(),
            lambda: source.reset([9, 9, 9]),
            lambda: source.clear(),
            lambda: source.extend([1, 2]),
        ]
        for step in steps:
            step()
            assert list(target) == image(source)


class TestRelayToSource:
    """Target changes reproduced on the source in two-way mode."""

    def test_add(self, source, target, two_way):
        target.append(40)
        assert source == [1, 2, 3, 4]

    def test_remove(self, source, target, two_way):
        target.pop(1)
        assert source == [1, 3]

    def test_replace(self, source, target, two_way):
        target[0] = 70
        assert source == [7, 2, 3]

    def test_move(self, source, target, two_way):
        target.move(2, 0)
        assert source == [3, 1, 2]

    def test_reset(self, source, target, two_way):
        target.reset([50])
        assert source == [5]


class TestModes:
    """One-way modes ignore the other direction."""

    def test_one_way_to_target_ignores_target(self, source, target, one_way_to_target):
        target.append(99)
        target.remove_range(0, 1)
        target.clear()
        assert source == [1, 2, 3]

    def test_one_way_to_target_relays_source(self, source, target, one_way_to_target):
        source.append(4)
        assert target == [10, 20, 30, 40]

    def test_one_way_to_source(self, source, target):
        Synchronizer(
            source, target, div_ten, times_ten,
            SyncConfig(mode=SyncMode.ONE_WAY_TO_SOURCE),
        )
        source.append(4)
        assert target == [10, 20, 30]

        target.append(50)
        assert source == [1, 2, 3, 4, 5]


class TestRelayGuard:
    """Mirrored changes are not relayed back."""

    def test_no_echo(self, source, target, two_way):
        source.append(4)
        assert source == [1, 2, 3, 4]
        assert two_way.stats.relays_to_target == 1
        assert two_way.stats.relays_to_source == 0
        assert two_way.stats.suppressed == 1

    def test_relaying_flag_set_during_relay(self, source, target, two_way):
        seen = []
        target.on_change(lambda sender, event: seen.append(two_way.is_relaying))
        source.append(4)
        assert seen == [True]
        assert two_way.is_relaying is False

    def test_other_target_subscribers_still_notified(self, source, target, two_way, recorder):
        target.on_change(recorder)
        source.append(4)
        assert recorder.actions == [ChangeAction.ADD]

    def test_chained_synchronizers(self):
        """A -> B -> C: each pair relays once, nothing loops."""
        a = ObservableList([1])
        b = ObservableList([10])
        c = ObservableList([100])
        Synchronizer(a, b, div_ten, times_ten)
        Synchronizer(b, c, div_ten, times_ten)

        a.append(2)
        assert b == [10, 20]
        assert c == [100, 200]

        c.pop(0)
        assert b == [20]
        assert a == [2]


class TestMappingFailure:
    """Mapping errors propagate and do not leave the pair stuck."""

    @staticmethod
    def fragile(x):
        if x < 0:
            raise ValueError("negative")
        return x * 10

    def test_error_propagates_as_mapping_error(self):
        source = ObservableList([1])
        target = ObservableList([10])
        sync = Synchronizer(source, target, div_ten, self.fragile)

        with pytest.raises(MappingError) as exc_info:
            source.append(-1)

        err = exc_info.value
        assert err.item == -1
        assert err.direction is RelayDirection.TO_TARGET
        assert isinstance(err.__cause__, ValueError)
        assert sync.stats.mapping_failures == 1
        assert "negative" in sync.stats.last_error

    def test_target_untouched_on_failure(self):
        source = ObservableList([1])
        target = ObservableList([10])
        Synchronizer(source, target, div_ten, self.fragile)

        with pytest.raises(MappingError):
            source.extend([2, -1, 3])

        # Source kept the change, target did not
        assert source == [1, 2, -1, 3]
        assert target == [10]

    def test_relaying_resumes_after_failure(self):
        source = ObservableList([1])
        target = ObservableList([10])
        sync = Synchronizer(source, target, div_ten, self.fragile)

        with pytest.raises(MappingError):
            source.append(-1)

        assert sync.is_relaying is False
        source.append(2)
        assert target == [10, 20]

    def test_rebuild_after_failure(self):
        outage = {"active": True}

        def flaky(x):
            if outage["active"]:
                raise ConnectionError("lookup unavailable")
            return x * 10

        source = ObservableList([1])
        target = ObservableList([10])
        sync = Synchronizer(source, target, div_ten, flaky)

        with pytest.raises(MappingError):
            source.extend([2, 3])
        assert target == [10]

        outage["active"] = False
        sync.rebuild_target()
        assert target == [10, 20, 30]

    def test_failure_is_logged(self, caplog):
        source = ObservableList([])
        target = ObservableList([])
        Synchronizer(source, target, div_ten, self.fragile, SyncConfig(name="fragile"))

        with caplog.at_level(logging.ERROR, logger="collection_sync.sync.synchronizer"):
            with pytest.raises(MappingError):
                source.append(-3)

        assert "fragile" in caplog.text
        assert "-3" in caplog.text

    def test_misaligned_remove_raises_index_error(self):
        source = ObservableList([1, 2, 3])
        target = ObservableList([10])
        Synchronizer(source, target, div_ten, times_ten)
        with pytest.raises(IndexError):
            source.remove_range(2, 1)


class TestRebuild:
    """Explicit full rebuilds."""

    def test_rebuild_target(self):
        source = ObservableList([1, 2])
        target = ObservableList([99])
        sync = Synchronizer(source, target, div_ten, times_ten)
        sync.rebuild_target()
        assert target == [10, 20]
        assert source == [1, 2]
        assert sync.stats.rebuilds == 1

    def test_rebuild_source(self):
        source = ObservableList([])
        target = ObservableList([30, 40])
        sync = Synchronizer(source, target, div_ten, times_ten)
        sync.rebuild_source()
        assert source == [3, 4]
        assert target == [30, 40]

    def test_rebuild_works_in_one_way_mode(self, source, target, one_way_to_target):
        target.append(40)
        assert source == [1, 2, 3]

        one_way_to_target.rebuild_source()
        assert source == [1, 2, 3, 4]

    def test_rebuild_after_dispose_raises(self, two_way):
        two_way.dispose()
        with pytest.raises(SynchronizerDisposedError):
            two_way.rebuild_target()


class TestDisposal:
    """dispose() detaches both listeners and is idempotent."""

    def test_dispose_stops_relaying(self, source, target, two_way):
        two_way.dispose()
        source.append(4)
        target.append(99)
        assert source == [1, 2, 3, 4]
        assert target == [10, 20, 30, 99]
        assert two_way.is_disposed is True

    def test_dispose_twice(self, source, target, two_way):
        two_way.dispose()
        two_way.dispose()
        source.append(4)
        assert target == [10, 20, 30]
        assert source.handler_count == 0
        assert target.handler_count == 0

    def test_dispose_one_way(self, source, target, one_way_to_target):
        one_way_to_target.dispose()
        assert source.handler_count == 0

    def test_dispose_leaves_other_handlers(self, source, two_way, recorder):
        source.on_change(recorder)
        two_way.dispose()
        source.append(4)
        assert recorder.actions == [ChangeAction.ADD]

    def test_context_manager(self, source, target):
        with Synchronizer(source, target, div_ten, times_ten) as sync:
            source.append(4)
            assert target == [10, 20, 30, 40]
        assert sync.is_disposed
        source.append(5)
        assert target == [10, 20, 30, 40]

    def test_repr(self, two_way):
        assert "two_way" in repr(two_way)
        two_way.dispose()
        assert "disposed" in repr(two_way)


class TestStats:
    """RelayStats counters."""

    def test_counts_by_direction_and_action(self, source, target, two_way):
        source.append(4)
        source.move(0, 1)
        target.pop()

        stats = two_way.stats
        assert stats.relays_to_target == 2
        assert stats.relays_to_source == 1
        assert stats.total_relays == 3
        assert stats.by_action == {"add": 1, "move": 1, "remove": 1}

    def test_to_dict(self):
        stats = RelayStats()
        stats.record(RelayDirection.TO_SOURCE, ChangeAction.RESET)
        d = stats.to_dict()
        assert d["relays_to_source"] == 1
        assert d["total_relays"] == 1
        assert d["by_action"] == {"reset": 1}
        assert d["last_error"] is None


class TestCreateSynchronizer:
    """Convenience factory with string options."""

    def test_string_options(self, source, target):
        sync = create_synchronizer(
            source, target, div_ten, times_ten,
            mode="ONE_WAY_TO_TARGET", add_strategy="mirror_index",
        )
        assert sync.mode is SyncMode.ONE_WAY_TO_TARGET
        assert sync.config.add_strategy is AddStrategy.MIRROR_INDEX
        assert target.handler_count == 0

    def test_invalid_mode(self, source, target):
        with pytest.raises(ValueError):
            create_synchronizer(source, target, div_ten, times_ten, mode="sideways")
