# File: app/core/exceptions.py
"""
Domain errors raised by services and CRUD helpers.

Every error carries the HTTP status it maps to; app.main renders them as
``{"success": false, "error": <message>}`` (plus ``data`` when present).
"""
from typing import Any, Dict, Optional


class InventraError(Exception):
    status_code = 500

    def __init__(self, message: str, data: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.data = data


class ValidationError(InventraError):
    status_code = 400


class InsufficientStockError(ValidationError):
    def __init__(self, available: int, requested: int):
        super().__init__(
            f"Insufficient stock. Available: {available}, Requested: {requested}",
            data={"available": available, "requested": requested},
        )
        self.available = available
        self.requested = requested


class AuthenticationError(InventraError):
    status_code = 401


class PermissionDeniedError(InventraError):
    status_code = 403


class NotFoundError(InventraError):
    status_code = 404


class ConflictError(InventraError):
    status_code = 409
