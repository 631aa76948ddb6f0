"""
Domain errors for the zone effect engine

Every error carries a machine readable code, a message and a details
dict so callers can log or serialize them uniformly.
"""

from typing import Any, Iterable, Optional


class DomainError(Exception):
    """Base class for domain-specific errors"""
    def __init__(self, code: str, message: str, details: Optional[dict] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "details": self.details}


class SinkError(DomainError):
    """Device sink rejected or failed a write/commit"""
    def __init__(self, message: str, operation: Optional[str] = None, zone_id: Any = None):
        details = {}
        if operation is not None:
            details["operation"] = operation
        if zone_id is not None:
            details["zone_id"] = zone_id
        super().__init__(code="SINK_ERROR", message=message, details=details)
        self.operation = operation
        self.zone_id = zone_id


class ConnectionLostError(SinkError):
    """Connection to the lighting device is gone"""
    def __init__(self, message: str = "Connection to device lost", operation: Optional[str] = None):
        super().__init__(message, operation=operation)
        self.code = "CONNECTION_LOST"


class EffectNotFoundError(DomainError):
    """Effect name doesn't exist in the catalog"""
    def __init__(self, name: str, available: Iterable[str] = ()):
        super().__init__(
            code="EFFECT_NOT_FOUND",
            message=f"Effect '{name}' not found",
            details={"name": name, "available": list(available)},
        )


class InvalidEffectParamsError(DomainError):
    """Effect parameters failed validation"""
    def __init__(self, effect: str, errors: list):
        super().__init__(
            code="INVALID_EFFECT_PARAMS",
            message=f"Invalid parameters for effect '{effect}'",
            details={"effect": effect, "errors": errors},
        )
        self.errors = errors


class InvalidSegmentLayoutError(DomainError):
    """Segment layout is empty or has duplicate zone ids"""
    def __init__(self, message: str, ids: Optional[list] = None):
        super().__init__(
            code="INVALID_SEGMENT_LAYOUT",
            message=message,
            details={"ids": ids},
        )


class ConfigError(DomainError):
    """Configuration unreadable and no usable fallback"""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(code="CONFIG_ERROR", message=message, details={"path": path})
