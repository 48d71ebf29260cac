import threading
from datetime import datetime, timezone

import pytest

from models.stock import IN_STOCK_QUANTITY
from services.stock_overlay import SqlStockOverlay, StockOverlay
from utils.exceptions import ConfigurationError

FIXED = datetime(2024, 7, 4, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def overlay():
    return StockOverlay(clock=lambda: FIXED)


def test_unknown_key_defaults_to_in_stock(overlay):
    assert overlay.get("branch-1", 42) == IN_STOCK_QUANTITY == 100
    assert overlay.is_in_stock("branch-1", 42)


def test_set_upserts_and_stamps(overlay):
    record = overlay.set("branch-1", 1, 7)
    assert (record.branch_id, record.menu_item_id, record.quantity) == ("branch-1", 1, 7)
    assert record.last_updated == FIXED
    assert record.in_stock

    record = overlay.set("branch-1", 1, 3)
    assert overlay.get("branch-1", 1) == 3
    assert len(overlay.records_for_branch("branch-1")) == 1


def test_negative_quantity_is_clamped(overlay):
    record = overlay.set("branch-1", 1, -5)
    assert record.quantity == 0
    assert not overlay.is_in_stock("branch-1", 1)


def test_stock_is_per_branch(overlay):
    overlay.set_out_of_stock("branch-1", 1)
    assert not overlay.is_in_stock("branch-1", 1)
    assert overlay.is_in_stock("branch-2", 1)


def test_in_and_out_of_stock_helpers(overlay):
    assert overlay.set_out_of_stock("branch-1", 1).quantity == 0
    assert overlay.set_in_stock("branch-1", 1).quantity == IN_STOCK_QUANTITY


def test_toggle_twice_restores_state(overlay):
    assert overlay.toggle("branch-1", 1).quantity == 0
    assert overlay.toggle("branch-1", 1).quantity == IN_STOCK_QUANTITY
    overlay.set("branch-1", 2, 5)
    overlay.toggle("branch-1", 2)
    overlay.toggle("branch-1", 2)
    assert overlay.is_in_stock("branch-1", 2)


def test_purge_helpers(overlay):
    overlay.set("branch-1", 1, 0)
    overlay.set("branch-2", 1, 0)
    overlay.set("branch-1", 2, 0)
    assert overlay.purge_item(1) == 2
    assert overlay.is_in_stock("branch-2", 1)
    assert overlay.purge_branch("branch-1") == 1
    assert overlay.records_for_branch("branch-1") == []


@pytest.mark.parametrize("branch_id", [None, "", "   ", "bad branch!"])
def test_invalid_branch_fails_fast(overlay, branch_id):
    with pytest.raises(ConfigurationError):
        overlay.get(branch_id, 1)


class _InterleavedOverlay(StockOverlay):
    """Forces two toggles to both read before either writes."""

    def __init__(self):
        super().__init__()
        self.barrier = threading.Barrier(2)

    def is_in_stock(self, branch_id, item_id):
        answer = super().is_in_stock(branch_id, item_id)
        self.barrier.wait(timeout=5)
        return answer


def test_concurrent_toggles_are_last_write_wins():
    overlay = _InterleavedOverlay()
    threads = [threading.Thread(target=overlay.toggle, args=("branch-1", 1)) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    # Both saw "in stock" and both wrote 0: one update was lost, nothing corrupted
    record = overlay.records_for_branch("branch-1")[0]
    assert record.quantity in (0, IN_STOCK_QUANTITY)
    assert record.quantity == 0
    assert (record.branch_id, record.menu_item_id) == ("branch-1", 1)


def test_many_concurrent_toggles_end_in_a_valid_state():
    overlay = StockOverlay()
    threads = [threading.Thread(target=overlay.toggle, args=("branch-1", 1)) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert overlay.get("branch-1", 1) in (0, IN_STOCK_QUANTITY)
    assert len(overlay.records_for_branch("branch-1")) == 1


def test_sql_ledger_behaves_like_the_in_memory_one(db):
    overlay = SqlStockOverlay(db, clock=lambda: FIXED)
    assert overlay.get("branch-1", 1) == IN_STOCK_QUANTITY
    overlay.set("branch-1", 1, -3)
    assert overlay.get("branch-1", 1) == 0
    assert overlay.toggle("branch-1", 1).quantity == IN_STOCK_QUANTITY
    assert overlay.toggle("branch-1", 1).quantity == 0
    overlay.set("branch-2", 1, 4)

    records = overlay.records_for_branch("branch-1")
    assert len(records) == 1
    assert not records[0].in_stock
    assert overlay.purge_item(1) == 2
    assert overlay.is_in_stock("branch-1", 1)
