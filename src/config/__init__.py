from .settings import settings
from .table_names import TableNames

__all__ = [
    "settings",
    "TableNames",
]
