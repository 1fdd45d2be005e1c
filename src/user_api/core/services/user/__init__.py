from .user_resource import UserResourceHandler, resolve_page
from .validation import ValidationResult, validate_user_fields

__all__ = [
    "UserResourceHandler",
    "ValidationResult",
    "resolve_page",
    "validate_user_fields",
]
