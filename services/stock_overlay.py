"""
Per-branch stock ledger layered over the shared catalog.

A missing record means "in stock": ``get`` answers ``IN_STOCK_QUANTITY`` and
``is_in_stock`` answers True until a branch writes something else. Writes are
plain read-modify-write with no locking, so two concurrent ``toggle`` calls on
the same key can lose an update; the last writer wins.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from models.stock import IN_STOCK_QUANTITY, StockRecord
from utils.validators import validate_branch_id

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StockOverlay:
    """In-memory ledger keyed by (branch_id, menu_item_id)."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._clock = clock
        self._records: Dict[Tuple[str, int], StockRecord] = {}

    # Storage hooks, overridden by SqlStockOverlay

    def _load(self, branch_id: str, item_id: int) -> Optional[StockRecord]:
        return self._records.get((branch_id, item_id))

    def _save(self, branch_id: str, item_id: int, quantity: int, stamp: datetime) -> StockRecord:
        record = StockRecord(branch_id=branch_id, menu_item_id=item_id, quantity=quantity, last_updated=stamp)
        self._records[(branch_id, item_id)] = record
        return record

    def records_for_branch(self, branch_id: str) -> List[StockRecord]:
        branch_id = validate_branch_id(branch_id)
        records = [record for (branch, _), record in self._records.items() if branch == branch_id]
        return sorted(records, key=lambda record: record.menu_item_id)

    def purge_item(self, item_id: int) -> int:
        keys = [key for key in self._records if key[1] == item_id]
        for key in keys:
            del self._records[key]
        return len(keys)

    def purge_branch(self, branch_id: str) -> int:
        keys = [key for key in self._records if key[0] == branch_id]
        for key in keys:
            del self._records[key]
        return len(keys)

    # Ledger operations

    def get(self, branch_id: str, item_id: int) -> int:
        record = self._load(validate_branch_id(branch_id), item_id)
        if record is None:
            return IN_STOCK_QUANTITY
        return record.quantity

    def set(self, branch_id: str, item_id: int, quantity: int) -> StockRecord:
        branch_id = validate_branch_id(branch_id)
        quantity = max(0, int(quantity))
        record = self._save(branch_id, item_id, quantity, self._clock())
        logger.info(f"Stock for item {item_id} at branch {branch_id} set to {quantity}")
        return record

    def set_in_stock(self, branch_id: str, item_id: int) -> StockRecord:
        return self.set(branch_id, item_id, IN_STOCK_QUANTITY)

    def set_out_of_stock(self, branch_id: str, item_id: int) -> StockRecord:
        return self.set(branch_id, item_id, 0)

    def is_in_stock(self, branch_id: str, item_id: int) -> bool:
        return self.get(branch_id, item_id) > 0

    def toggle(self, branch_id: str, item_id: int) -> StockRecord:
        # Read then write: not atomic, concurrent togglers race
        if self.is_in_stock(branch_id, item_id):
            return self.set_out_of_stock(branch_id, item_id)
        return self.set_in_stock(branch_id, item_id)


class SqlStockOverlay(StockOverlay):
    """The same ledger persisted in the stock_records table."""

    def __init__(self, db: Session, clock: Callable[[], datetime] = _utcnow):
        super().__init__(clock=clock)
        self.db = db

    def _load(self, branch_id: str, item_id: int) -> Optional[StockRecord]:
        return self.db.query(StockRecord).filter(
            StockRecord.branch_id == branch_id,
            StockRecord.menu_item_id == item_id
        ).first()

    def _save(self, branch_id: str, item_id: int, quantity: int, stamp: datetime) -> StockRecord:
        record = self._load(branch_id, item_id)
        if record is None:
            record = StockRecord(branch_id=branch_id, menu_item_id=item_id)
            self.db.add(record)
        record.quantity = quantity
        record.last_updated = stamp
        self.db.commit()
        self.db.refresh(record)
        return record

    def records_for_branch(self, branch_id: str) -> List[StockRecord]:
        branch_id = validate_branch_id(branch_id)
        return self.db.query(StockRecord).filter(
            StockRecord.branch_id == branch_id
        ).order_by(StockRecord.menu_item_id).all()

    def purge_item(self, item_id: int) -> int:
        deleted = self.db.query(StockRecord).filter(StockRecord.menu_item_id == item_id).delete()
        self.db.commit()
        return deleted

    def purge_branch(self, branch_id: str) -> int:
        deleted = self.db.query(StockRecord).filter(StockRecord.branch_id == branch_id).delete()
        self.db.commit()
        return deleted
