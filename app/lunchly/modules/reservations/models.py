from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.lunchly.models import Base, normalize_text


class Reservation(Base):
    """A booking for one customer."""

    __tablename__ = "reservations"
    __table_args__ = (
        Index("idx_reservations_customer_id", "customer_id", "start_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), nullable=False)
    start_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    num_guests: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __init__(
        self,
        *,
        customer_id: int,
        start_at: datetime,
        num_guests: int,
        notes: str | None = None,
        id: int | None = None,
    ) -> None:
        super().__init__(
            id=id,
            customer_id=customer_id,
            start_at=start_at,
            num_guests=num_guests,
            notes=normalize_text(notes),
        )

    @property
    def formatted_start_at(self) -> str:
        dt = self.start_at
        hour = dt.hour % 12 or 12
        return f"{dt:%B} {dt.day} {dt.year}, {hour}:{dt:%M %p}"

    def __repr__(self) -> str:
        return f"<Reservation id={self.id} customer_id={self.customer_id} start_at={self.start_at}>"
