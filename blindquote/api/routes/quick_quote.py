"""Quick quote API routes.

快速報價畫面：數字鍵、儲存格點選、列操作、計價與重設。
"""

import logging
from typing import Optional, Union
from fastapi import APIRouter
from pydantic import BaseModel, Field

from ...models import APIResponse
from ...api.dependencies import SessionDep
from ...services.quick_quote import DIMENSION_COLUMNS
from ...utils import ErrorCode, raise_error
from .common import ensure_row, snapshot_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/sessions/{session_id}", tags=["Quick Quote"])


# ============================================================================
# Request Models
# ============================================================================


class KeyPressRequest(BaseModel):
    key: str = Field(..., min_length=1, description="數字、DEL、W、H 或 ENT")


class CellRequest(BaseModel):
    row_index: int = Field(..., ge=0, description="列索引（0 起算）")
    column: str = Field(..., description="欄位名稱")


class CellValueRequest(BaseModel):
    """直接寫入寬 / 高（經過驗證）."""

    value: Optional[Union[int, str]] = Field(None, description="尺寸 (mm)；空值表示清除")


# ============================================================================
# Routes
# ============================================================================


@router.post("/keys", response_model=APIResponse, summary="數字鍵盤輸入")
async def press_key(request: KeyPressRequest, session: SessionDep) -> dict:
    session.quick_quote.handle_numeric_key(request.key)
    return snapshot_response(session, f"按鍵 {request.key}")


@router.post("/cells/click", response_model=APIResponse, summary="點選儲存格")
async def click_cell(request: CellRequest, session: SessionDep) -> dict:
    ensure_row(session, request.row_index)
    session.quick_quote.handle_table_cell_click(request.row_index, request.column)
    return snapshot_response(session, "儲存格已選取")


@router.put(
    "/rows/{row_index}/cells/{column}",
    response_model=APIResponse,
    summary="寫入尺寸",
)
async def set_cell_value(
    row_index: int,
    column: str,
    request: CellValueRequest,
    session: SessionDep,
) -> dict:
    """
    將值寫入指定列的寬或高.

    驗證失敗時文件不變，錯誤會出現在 notifications。
    """
    if column not in DIMENSION_COLUMNS:
        raise_error(ErrorCode.INVALID_FIELD, f"無效的欄位名稱: {column}")
    ensure_row(session, row_index)

    session.ui_service.set_active_cell(row_index, column)
    session.ui_service.set_input_value(request.value)
    changed = session.quick_quote.commit_value()
    return snapshot_response(session, "已更新" if changed else "未變更")


@router.post("/rows/{row_index}/select", response_model=APIResponse, summary="選取列")
async def select_row(row_index: int, session: SessionDep) -> dict:
    """一般模式切換單列選取；多列刪除模式切換勾選."""
    ensure_row(session, row_index)
    session.quick_quote.handle_sequence_cell_click(row_index)
    return snapshot_response(session, "選取已更新")


@router.post("/rows/insert", response_model=APIResponse, summary="插入列")
async def insert_row(session: SessionDep) -> dict:
    new_index = session.quick_quote.insert_row()
    message = f"已插入第 {new_index + 1} 列" if new_index is not None else "未插入"
    return snapshot_response(session, message)


@router.post("/rows/delete", response_model=APIResponse, summary="刪除列")
async def delete_rows(session: SessionDep) -> dict:
    deleted = session.quick_quote.delete_row()
    return snapshot_response(session, "已刪除" if deleted else "未刪除")


@router.post("/rows/clear", response_model=APIResponse, summary="清除列")
async def clear_row(session: SessionDep) -> dict:
    cleared = session.quick_quote.clear_row()
    return snapshot_response(session, "已清除" if cleared else "未清除")


@router.post("/rows/multi-delete", response_model=APIResponse, summary="切換多列刪除模式")
async def toggle_multi_delete(session: SessionDep) -> dict:
    entering = session.quick_quote.toggle_multi_delete_mode()
    return snapshot_response(session, "進入多列刪除模式" if entering else "離開多列刪除模式")


@router.post("/cycle-type", response_model=APIResponse, summary="批次切換布料類型")
async def cycle_type(session: SessionDep) -> dict:
    changed = session.quick_quote.cycle_type()
    return snapshot_response(session, "布料類型已切換" if changed else "未變更")


@router.post("/calculate", response_model=APIResponse, summary="計價並加總")
async def calculate(session: SessionDep) -> dict:
    """
    計算所有列價格與總價.

    計價錯誤不視為 HTTP 錯誤：回傳 first_error 並附上通知。
    """
    result = session.calculate_and_sum()
    message = result.first_error.message if result.first_error else "計算完成"
    return snapshot_response(session, message)


@router.post("/reset", response_model=APIResponse, summary="重設報價單")
async def reset(session: SessionDep) -> dict:
    """送出確認請求；確認後才清除所有資料."""
    session.quick_quote.reset()
    return snapshot_response(session, "等待確認")
