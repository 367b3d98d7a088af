from .table_schemas import TablePayload, TableResponse

__all__ = ["TablePayload", "TableResponse"]
