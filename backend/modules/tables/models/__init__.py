from .table_models import Table, TableStatus

__all__ = ["Table", "TableStatus"]
