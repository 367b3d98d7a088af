from .table_service import TableService

__all__ = ["TableService"]
