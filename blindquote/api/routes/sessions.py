"""Quote session API routes.

工作階段的建立、查詢、匯出、畫面切換與確認回應。
"""

import logging
from typing import Optional
from fastapi import APIRouter
from pydantic import BaseModel, Field

from ...config import settings
from ...models import APIResponse, QuoteDocument, View
from ...api.dependencies import CatalogDep, ProductFactoryDep, SessionDep, StoreDep
from ...utils import ErrorCode, raise_error
from .common import snapshot_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/sessions", tags=["Session"])


# ============================================================================
# Request Models
# ============================================================================


class CreateSessionRequest(BaseModel):
    """建立工作階段請求."""

    product_type: Optional[str] = Field(None, description="產品類型，預設使用設定值")
    document: Optional[QuoteDocument] = Field(None, description="匯入的報價單文件")


class SwitchViewRequest(BaseModel):
    view: View


class ConfirmationResponseRequest(BaseModel):
    """確認對話框回應."""

    accepted: bool = Field(..., description="True 執行變更，False 取消")


# ============================================================================
# Routes
# ============================================================================


@router.post(
    "",
    response_model=APIResponse,
    status_code=201,
    summary="建立報價工作階段",
)
async def create_session(
    store: StoreDep,
    catalog: CatalogDep,
    product_factory: ProductFactoryDep,
    request: Optional[CreateSessionRequest] = None,
) -> dict:
    """
    建立新的報價工作階段.

    - **product_type**: 產品類型（預設 roller_blind）
    - **document**: 可選，從先前匯出的文件還原
    """
    request = request or CreateSessionRequest()
    session = store.create_session(
        product_factory,
        catalog,
        initial_document=request.document,
        product_type=request.product_type or settings.product_type,
    )
    return snapshot_response(session, "工作階段已建立")


@router.get(
    "/{session_id}",
    response_model=APIResponse,
    summary="取得工作階段快照",
)
async def get_session(session: SessionDep) -> dict:
    return snapshot_response(session, "取得工作階段快照")


@router.delete(
    "/{session_id}",
    response_model=APIResponse,
    summary="刪除工作階段",
)
async def delete_session(session_id: str, store: StoreDep) -> dict:
    store.delete_session(session_id)
    return {"success": True, "message": "工作階段已刪除", "data": {"session_id": session_id}}


@router.get(
    "/{session_id}/export",
    response_model=APIResponse,
    summary="匯出報價單文件",
)
async def export_document(session: SessionDep) -> dict:
    """匯出目前的報價單文件（可用於建立工作階段時還原）."""
    return {
        "success": True,
        "message": "報價單已匯出",
        "data": session.quote_service.get_quote_data().model_dump(mode="json"),
    }


@router.post(
    "/{session_id}/view",
    response_model=APIResponse,
    summary="切換畫面",
)
async def switch_view(request: SwitchViewRequest, session: SessionDep) -> dict:
    session.switch_view(request.view)
    return snapshot_response(session, f"已切換至 {request.view.value}")


@router.post(
    "/{session_id}/confirmations/{request_id}",
    response_model=APIResponse,
    summary="回應確認請求",
)
async def respond_confirmation(
    request_id: str,
    request: ConfirmationResponseRequest,
    session: SessionDep,
) -> dict:
    """
    回應確認對話框.

    - **accepted**: True 執行延遲的變更；False 捨棄
    """
    if not session.confirm(request_id, request.accepted):
        raise_error(ErrorCode.CONFIRMATION_NOT_FOUND)
    message = "已確認" if request.accepted else "已取消"
    return snapshot_response(session, message)
