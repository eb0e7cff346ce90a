from __future__ import annotations

from sqlalchemy import Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.lunchly.models import Base, normalize_optional, normalize_text


class Customer(Base):
    """
    Customer of the restaurant.

    Normalization happens once, in the constructor. Rows loaded from the
    database are already normalized by the NOT NULL / nullable columns.
    """

    __tablename__ = "customers"
    __table_args__ = (
        Index("idx_customers_last_first", "last_name", "first_name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    middle_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __init__(
        self,
        *,
        first_name: str,
        last_name: str,
        middle_name: str | None = None,
        phone: str | None = None,
        notes: str | None = None,
        id: int | None = None,
    ) -> None:
        super().__init__(
            id=id,
            first_name=first_name,
            middle_name=normalize_optional(middle_name),
            last_name=last_name,
            phone=normalize_optional(phone),
            notes=normalize_text(notes),
        )

    @property
    def full_name(self) -> str:
        if self.middle_name:
            return f"{self.first_name} {self.middle_name} {self.last_name}"
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Customer id={self.id} name={self.full_name!r}>"
