"""Models package."""

from .line_item import LineItem
from .quote import (
    AccessoryEntry,
    AccessoryKind,
    AccessorySummary,
    Customer,
    QuoteDocument,
    Summary,
)
from .rates import AccessoryPrice, RateMatrix, RateSource, ValidationRule
from .results import (
    CalculationResult,
    ConfirmationRequest,
    Notification,
    NotificationType,
    PriceResult,
    PricingError,
)
from .ui_state import (
    AccessoryPrices,
    Cell,
    DetailTab,
    DriveAccessoryMode,
    DualChainMode,
    EditMode,
    UIState,
    View,
)
from .responses import APIResponse, ErrorResponse

__all__ = [
    "LineItem",
    "AccessoryEntry",
    "AccessoryKind",
    "AccessorySummary",
    "Customer",
    "QuoteDocument",
    "Summary",
    "AccessoryPrice",
    "RateMatrix",
    "RateSource",
    "ValidationRule",
    "CalculationResult",
    "ConfirmationRequest",
    "Notification",
    "NotificationType",
    "PriceResult",
    "PricingError",
    "AccessoryPrices",
    "Cell",
    "DetailTab",
    "DriveAccessoryMode",
    "DualChainMode",
    "EditMode",
    "UIState",
    "View",
    "APIResponse",
    "ErrorResponse",
]
