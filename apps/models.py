"""
Model registration: import every table model here so SQLModel.metadata knows it before create_all.
When adding/removing apps, add/remove the corresponding imports here.
"""
from apps.users.models import User
from apps.orders.models import OrderItem

__all__ = ["User", "OrderItem"]
