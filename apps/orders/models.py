from decimal import Decimal
from sqlmodel import SQLModel, Field
from typing import Optional

class OrderItem(SQLModel, table=True):
    """Order line: quantity of a product at the price it was ordered for."""
    __tablename__ = "order_items"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    quantity: int = Field(default=1)
    price: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)

    @property
    def subtotal(self) -> Decimal:
        return self.quantity * self.price
