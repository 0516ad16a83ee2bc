"""Base exception classes for og-access"""

from typing import List, Optional, Dict, Any

class OgError(Exception):
    """Base exception for all og-access errors"""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

class ValidationError(OgError):
    """Raised when an argument violates the API contract"""
    
    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(
            f"Validation failed: {', '.join(errors)}",
            {"errors": errors}
        )

class ConfigurationError(OgError):
    """Raised when group or membership configuration is inconsistent"""
    pass

class NotFoundError(OgError):
    """Raised when a registered item doesn't exist"""
    
    def __init__(self, resource_type: str, resource_id: str):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            {
                "resource_type": resource_type,
                "resource_id": resource_id
            }
        )
