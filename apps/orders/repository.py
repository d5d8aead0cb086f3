"""Order module repository implementation."""

from framework.repository.base import BaseRepository
from .models import OrderItem


class OrderItemRepository(BaseRepository[OrderItem]):
    """Order item repository."""

    def __init__(self, session):
        super().__init__(session, OrderItem)
