"""
Tests for the bounded undo history.

Covers:
- Checkpoint / undo as a plain stack
- Deep copy isolation of snapshots
- Capacity and oldest-first eviction
- Pending (gesture) checkpoints
- Listener notifications
"""
import pytest

from layer_aligner.utils.history_manager import HistoryManager


# ══════════════════════════════════════════════════════════════════════════
# Stack behaviour
# ══════════════════════════════════════════════════════════════════════════

class TestHistoryStack:

    @pytest.fixture
    def hm(self):
        return HistoryManager(max_history=50)

    def test_initial_state_empty(self, hm):
        assert not hm.can_undo()
        assert hm.get_undo_description() == ""

    def test_single_checkpoint_can_undo(self, hm):
        hm.checkpoint({"v": 1}, "first")
        assert hm.can_undo()

    def test_undo_returns_latest_checkpoint(self, hm):
        hm.checkpoint({"v": 1}, "first")
        hm.checkpoint({"v": 2}, "second")
        assert hm.undo() == {"v": 2}
        assert hm.undo() == {"v": 1}
        assert not hm.can_undo()

    def test_undo_on_empty_returns_none(self, hm):
        assert hm.undo() is None

    def test_description_of_latest_entry(self, hm):
        hm.checkpoint({"v": 1}, "first")
        hm.checkpoint({"v": 2}, "second")
        assert hm.get_undo_description() == "second"

    def test_clear(self, hm):
        hm.checkpoint({"v": 1}, "first")
        hm.clear()
        assert not hm.can_undo()

    # ── deep copy isolation ─────────────────────────────────────────

    def test_checkpoint_is_deep_copy(self, hm):
        data = {"nested": [1, 2, 3]}
        hm.checkpoint(data, "save")
        data["nested"].append(999)
        assert hm.undo() == {"nested": [1, 2, 3]}


# ══════════════════════════════════════════════════════════════════════════
# Capacity
# ══════════════════════════════════════════════════════════════════════════

class TestHistoryCapacity:

    def test_default_capacity_is_fifty(self):
        assert HistoryManager().max_history == 50

    def test_oldest_entry_evicted(self):
        hm = HistoryManager(max_history=50)
        for i in range(60):
            hm.checkpoint({"v": i}, f"step {i}")
        assert len(hm.history) == 50

        restored = []
        while hm.can_undo():
            restored.append(hm.undo()["v"])
        assert restored == list(range(59, 9, -1))

    def test_small_capacity(self):
        hm = HistoryManager(max_history=2)
        for i in range(3):
            hm.checkpoint(i)
        assert [entry['data'] for entry in hm.history] == [1, 2]


# ══════════════════════════════════════════════════════════════════════════
# Pending (gesture) checkpoints
# ══════════════════════════════════════════════════════════════════════════

class TestPendingCheckpoint:

    @pytest.fixture
    def hm(self):
        return HistoryManager()

    def test_pending_not_pushed_until_commit(self, hm):
        hm.begin_pending({"v": 1}, "drag")
        assert hm.has_pending()
        assert not hm.can_undo()

    def test_commit_pushes_snapshot_taken_at_begin(self, hm):
        state = {"v": 1}
        hm.begin_pending(state, "drag")
        state["v"] = 2
        assert hm.commit_pending() is True
        assert not hm.has_pending()
        assert hm.undo() == {"v": 1}

    def test_commit_without_pending(self, hm):
        assert hm.commit_pending() is False
        assert not hm.can_undo()

    def test_discard_pending(self, hm):
        hm.begin_pending({"v": 1})
        hm.discard_pending()
        assert hm.commit_pending() is False

    def test_clear_drops_pending(self, hm):
        hm.begin_pending({"v": 1})
        hm.clear()
        assert not hm.has_pending()


# ══════════════════════════════════════════════════════════════════════════
# Listeners
# ══════════════════════════════════════════════════════════════════════════

class TestHistoryListeners:

    def test_listener_called_with_can_undo(self):
        hm = HistoryManager()
        calls = []
        hm.add_listener(calls.append)
        hm.checkpoint({"v": 1})
        hm.undo()
        assert calls == [True, False]

    def test_removed_listener_not_called(self):
        hm = HistoryManager()
        calls = []
        hm.add_listener(calls.append)
        hm.remove_listener(calls.append)
        hm.checkpoint({"v": 1})
        assert calls == []

    def test_commit_pending_notifies(self):
        hm = HistoryManager()
        calls = []
        hm.add_listener(calls.append)
        hm.begin_pending({"v": 1})
        assert calls == []
        hm.commit_pending()
        assert calls == [True]
