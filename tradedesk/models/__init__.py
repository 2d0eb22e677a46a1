"""ORM models package -- import all models so create_all discovers them."""

from tradedesk.models.base import Base
from tradedesk.models.kv_record import KeyValueRecord

__all__ = [
    "Base",
    "KeyValueRecord",
]
