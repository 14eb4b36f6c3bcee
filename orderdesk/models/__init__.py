"""
Data Models Package.

Re-exports all Pydantic models for convenient imports:
    from orderdesk.models import User, Order, LoginRecord
    from orderdesk.models import OrderStatus, ActivityType, FilterOperator, SortOrder
    from orderdesk.models import SearchParameters, PaginatedResponse, ApiResponse
"""

from orderdesk.models.enums import ActivityType, FilterOperator, OrderStatus, SortOrder
from orderdesk.models.entity import Entity, RecordMetadata
from orderdesk.models.user import User
from orderdesk.models.order import Order, generate_order_number
from orderdesk.models.login_record import LoginRecord
from orderdesk.models.search_models import (
    ApiResponse,
    FilterCriteria,
    PaginatedResponse,
    PaginationMeta,
    SearchParameters,
)
from orderdesk.models.forms import (
    FieldError,
    LoginFormData,
    OrderSearchForm,
    UserRegistrationData,
)
from orderdesk.models.auth_models import AuthErrorCode, AuthResult, AuthUser

__all__ = [
    "ActivityType",
    "FilterOperator",
    "OrderStatus",
    "SortOrder",
    "Entity",
    "RecordMetadata",
    "User",
    "Order",
    "generate_order_number",
    "LoginRecord",
    "ApiResponse",
    "FilterCriteria",
    "PaginatedResponse",
    "PaginationMeta",
    "SearchParameters",
    "FieldError",
    "LoginFormData",
    "OrderSearchForm",
    "UserRegistrationData",
    "AuthErrorCode",
    "AuthResult",
    "AuthUser",
]
