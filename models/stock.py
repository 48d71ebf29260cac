from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from utils.database import Base

# Quantity written by "mark in stock" and assumed when a branch has no record
IN_STOCK_QUANTITY = 100


class StockRecord(Base):
    __tablename__ = "stock_records"
    __table_args__ = (
        UniqueConstraint("branch_id", "menu_item_id", name="uq_stock_branch_item"),
    )

    id = Column(Integer, primary_key=True, index=True)
    branch_id = Column(String, nullable=False, index=True)
    menu_item_id = Column(Integer, nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=IN_STOCK_QUANTITY)
    last_updated = Column(DateTime(timezone=True), nullable=False)

    @property
    def in_stock(self) -> bool:
        return self.quantity > 0
