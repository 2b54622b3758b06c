"""API Response models."""

from pydantic import BaseModel, Field
from typing import Any, Dict, Generic, List, Optional, TypeVar
from datetime import datetime

from .quote import QuoteDocument
from .results import ConfirmationRequest, Notification, PricingError
from .ui_state import UIState


T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    success: bool = Field(..., description="是否成功")
    message: str = Field(..., description="訊息")
    data: Optional[T] = Field(None, description="回應資料")
    timestamp: datetime = Field(default_factory=datetime.now, description="回應時間")


class ErrorResponse(BaseModel):
    """Error response model."""

    success: bool = Field(False, description="是否成功")
    message: str = Field(..., description="錯誤訊息")
    error_code: Optional[str] = Field(None, description="錯誤代碼")
    details: Optional[Any] = Field(None, description="錯誤細節")
    timestamp: datetime = Field(default_factory=datetime.now, description="回應時間")


class SessionSnapshot(BaseModel):
    """
    工作階段快照（文件 + UI 狀態）.

    每次變更後回傳，外部呈現層據此重新繪製。
    """

    session_id: str = Field(..., description="工作階段 ID")
    document: QuoteDocument
    ui: UIState
    notifications: List[Notification] = Field(default_factory=list, description="本次操作產生的通知")
    pending_confirmations: List[ConfirmationRequest] = Field(
        default_factory=list, description="等待使用者確認的變更"
    )
    first_error: Optional[PricingError] = Field(None, description="最近一次計算的第一個錯誤")

    def to_dict(self) -> Dict[str, Any]:
        """轉為可序列化 dict."""
        return self.model_dump(mode="json")
