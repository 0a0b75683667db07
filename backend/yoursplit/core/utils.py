"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional


def format_error(message: str, code: Optional[str] = None, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response: Dict[str, Any] = {"detail": message}
    if code:
        response["code"] = code
    if details:
        response["details"] = details
    return response
