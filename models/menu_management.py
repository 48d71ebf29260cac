from sqlalchemy import Column, Integer, String, Boolean, DateTime, Float
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from utils.database import Base


class SeasonalMenu(Base):
    __tablename__ = "seasonal_menus"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    start_date = Column(String(10), nullable=False)   # YYYY-MM-DD, inclusive
    end_date = Column(String(10), nullable=False)     # YYYY-MM-DD, inclusive
    start_time = Column(String(5), nullable=False)    # HH:MM
    end_time = Column(String(5), nullable=False)      # HH:MM, may be earlier than start_time
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Ownership is a plain reference on the item side, not a foreign key
    items = relationship(
        "MenuItem",
        primaryjoin="SeasonalMenu.id == foreign(MenuItem.seasonal_menu_id)",
        order_by="MenuItem.id",
        viewonly=True,
    )


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    price = Column(Float, nullable=False)
    base_price = Column(Float, nullable=False)
    category = Column(String, nullable=False, index=True)
    image = Column(String, nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)
    seasonal_menu_id = Column(Integer, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
