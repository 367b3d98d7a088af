from .table_routes import router

__all__ = ["router"]
