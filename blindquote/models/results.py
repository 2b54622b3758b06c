"""Result and message records returned by the pricing core."""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional
import uuid

from pydantic import BaseModel, Field

from .quote import QuoteDocument


@dataclass(frozen=True)
class PriceResult:
    """Outcome of pricing a single line item.

    Attributes:
        price: Matrix price, or None when pricing failed
        error: Human-readable reason when price is None
    """

    price: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.price is not None

    @classmethod
    def success(cls, price: float) -> "PriceResult":
        return cls(price=price)

    @classmethod
    def failure(cls, error: str) -> "PriceResult":
        return cls(price=None, error=error)


class PricingError(BaseModel):
    """計價錯誤（每次計算只回報第一個）."""

    message: str = Field(..., description="錯誤訊息，如 'Row 2: Width 3500 exceeds ...'")
    row_index: Optional[int] = Field(None, ge=0, description="錯誤列索引（0 起算）")
    column: Optional[Literal["width", "height"]] = Field(None, description="需聚焦的欄位")


@dataclass
class CalculationResult:
    """Outcome of one orchestration pass.

    Attributes:
        document: New document value carrying line prices and total
        first_error: First pricing error encountered, if any
    """

    document: QuoteDocument
    first_error: Optional[PricingError] = None


class NotificationType(str, Enum):
    """通知類型."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Notification(BaseModel):
    """顯示給使用者的通知."""

    message: str
    type: NotificationType = NotificationType.INFO


class ConfirmationRequest(BaseModel):
    """需要使用者確認的延遲變更（回呼由工作階段保存）."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    message: str
    confirm_label: str = "確定"
    cancel_label: str = "取消"
