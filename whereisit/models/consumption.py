"""
Consumption Entry Model
Append-only log of consumption events for an item.

Each event stores the consumed delta and the quantity left afterwards.
Rows are never updated; they disappear only with their item.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from whereisit.db.base import Base


class ConsumptionEntry(Base):
    __tablename__ = "consumption_history"

    id = Column(Integer, primary_key=True, autoincrement=True)

    item_id = Column(
        Integer,
        ForeignKey("items.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    quantity_remaining = Column(Integer, nullable=False)
    consumed_quantity = Column(Integer, nullable=False)

    # Python-side default keeps sub-second precision on every backend
    recorded_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True
    )

    item = relationship("Item", back_populates="consumption_history")

    def __repr__(self):
        return (
            f"<ConsumptionEntry(item_id={self.item_id}, consumed={self.consumed_quantity}, "
            f"remaining={self.quantity_remaining})>"
        )
