"""HTTP 邊界錯誤.

報價核心以回傳值回報可預期的狀況（驗證失敗、計價錯誤、查無資料），
APIError 只在 HTTP 邊界拋出，由 main.py 的例外處理器轉為 ErrorResponse。
"""

from enum import Enum
from typing import Any, Dict, Optional
import logging


logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """錯誤代碼."""

    # 價目表
    RATE_SOURCE_NOT_FOUND = "RATE_SOURCE_NOT_FOUND"
    RATE_SOURCE_INVALID = "RATE_SOURCE_INVALID"
    CATALOG_NOT_READY = "CATALOG_NOT_READY"

    # 請求內容
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_FIELD = "INVALID_FIELD"
    PRODUCT_NOT_SUPPORTED = "PRODUCT_NOT_SUPPORTED"

    # 工作階段資源
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    ROW_NOT_FOUND = "ROW_NOT_FOUND"
    CONFIRMATION_NOT_FOUND = "CONFIRMATION_NOT_FOUND"

    INTERNAL_ERROR = "INTERNAL_ERROR"


ERROR_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.RATE_SOURCE_NOT_FOUND: "找不到價目表檔案",
    ErrorCode.RATE_SOURCE_INVALID: "價目表格式錯誤",
    ErrorCode.CATALOG_NOT_READY: "價目表尚未載入",
    ErrorCode.VALIDATION_ERROR: "資料驗證失敗",
    ErrorCode.INVALID_REQUEST: "無效的請求",
    ErrorCode.INVALID_FIELD: "無效的欄位名稱",
    ErrorCode.PRODUCT_NOT_SUPPORTED: "不支援的產品類型",
    ErrorCode.SESSION_NOT_FOUND: "找不到報價工作階段",
    ErrorCode.ROW_NOT_FOUND: "找不到指定的列",
    ErrorCode.CONFIRMATION_NOT_FOUND: "找不到待確認的操作",
    ErrorCode.INTERNAL_ERROR: "伺服器內部錯誤",
}

# 未列出的代碼預設為 400
ERROR_STATUS: Dict[ErrorCode, int] = {
    ErrorCode.RATE_SOURCE_NOT_FOUND: 503,
    ErrorCode.RATE_SOURCE_INVALID: 503,
    ErrorCode.CATALOG_NOT_READY: 503,
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.ROW_NOT_FOUND: 404,
    ErrorCode.CONFIRMATION_NOT_FOUND: 404,
    ErrorCode.INTERNAL_ERROR: 500,
}


class APIError(Exception):
    """HTTP 邊界錯誤，帶錯誤代碼、狀態碼與細節."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        """
        Args:
            error_code: 錯誤代碼
            message: 自訂訊息；None 時使用 ERROR_MESSAGES 的預設訊息
            status_code: HTTP 狀態碼；None 時依 ERROR_STATUS 決定
            details: 附加細節（會原樣放入回應）
        """
        self.error_code = error_code
        self.message = message or ERROR_MESSAGES.get(error_code, "發生錯誤")
        self.status_code = status_code or ERROR_STATUS.get(error_code, 400)
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """ErrorResponse 的欄位."""
        return {
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
        }


def raise_error(
    error_code: ErrorCode,
    message: Optional[str] = None,
    status_code: Optional[int] = None,
    details: Optional[Any] = None,
) -> None:
    """
    拋出 APIError.

    Raises:
        APIError: 一律拋出
    """
    raise APIError(error_code, message=message, status_code=status_code, details=details)


def log_error(error: Exception, context: str = "") -> None:
    """記錄錯誤；非 APIError 附上 traceback."""
    if isinstance(error, APIError):
        logger.error(
            f"[{context}] {error.error_code.value} ({error.status_code}): {error.message}",
            extra={"details": error.details},
        )
    else:
        logger.error(f"[{context}] Unexpected error: {error}", exc_info=True)
