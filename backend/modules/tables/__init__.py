# backend/modules/tables/__init__.py
