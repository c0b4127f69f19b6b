"""Tests for LruLedger."""

from nscache.ledger import LruLedger


class TestLruLedger:
    def test_touch_appends_new_keys(self):
        ledger = LruLedger()
        ledger.touch("a")
        ledger.touch("b")
        assert ledger.to_list() == ["a", "b"]

    def test_touch_moves_existing_key_to_end(self):
        ledger = LruLedger(["a", "b", "c"])
        ledger.touch("a")
        assert ledger.to_list() == ["b", "c", "a"]
        assert len(ledger) == 3

    def test_initial_duplicates_collapse(self):
        ledger = LruLedger(["a", "b", "a"])
        assert ledger.to_list() == ["a", "b"]

    def test_discard(self):
        ledger = LruLedger(["a", "b"])
        assert ledger.discard("a") is True
        assert ledger.to_list() == ["b"]

    def test_discard_missing_is_noop(self):
        ledger = LruLedger(["a", "b"])
        assert ledger.discard("zzz") is False
        assert ledger.to_list() == ["a", "b"]

    def test_evict_truncates_head(self):
        ledger = LruLedger(["a", "b", "c", "d"])
        assert ledger.evict(2) == ["a", "b"]
        assert ledger.to_list() == ["c", "d"]

    def test_evict_within_limit(self):
        ledger = LruLedger(["a", "b"])
        assert ledger.evict(5) == []
        assert ledger.to_list() == ["a", "b"]

    def test_evict_unbounded(self):
        ledger = LruLedger(["a", "b"])
        assert ledger.evict(None) == []
        assert ledger.evict(0) == []
        assert len(ledger) == 2

    def test_contains_and_clear(self):
        ledger = LruLedger(["a"])
        assert "a" in ledger
        ledger.clear()
        assert "a" not in ledger
        assert list(ledger) == []
