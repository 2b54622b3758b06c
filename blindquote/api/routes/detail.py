"""Detail config API routes.

明細設定畫面：頁籤、安裝處所、布料 / Light-Filter、K3 選項、
雙層支架 / 拉繩長度、驅動與配件。
"""

import logging
from fastapi import APIRouter
from pydantic import BaseModel, Field

from ...models import APIResponse, DetailTab, DriveAccessoryMode, DualChainMode
from ...api.dependencies import SessionDep
from ...services.detail_config import K3_COLUMNS
from ...utils import ErrorCode, raise_error
from .common import ensure_row, snapshot_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/sessions/{session_id}/detail", tags=["Detail Config"])


# ============================================================================
# Request Models
# ============================================================================


class TabRequest(BaseModel):
    tab: DetailTab


class CellRequest(BaseModel):
    row_index: int = Field(..., ge=0, description="列索引（0 起算）")
    column: str = Field(..., description="欄位名稱")


class TextValueRequest(BaseModel):
    value: str = Field("", description="輸入值")


class FabricByTypeRequest(BaseModel):
    fabric_type: str = Field(..., description="布料類型代碼")
    fabric: str = Field("", description="布料名稱")
    color: str = Field("", description="顏色")


class LightFilterRequest(BaseModel):
    fabric: str = Field(..., description="Light-Filter 布料名稱")
    color: str = Field("", description="顏色")


class ColumnRequest(BaseModel):
    column: str


class DualChainModeRequest(BaseModel):
    mode: DualChainMode


class DriveModeRequest(BaseModel):
    mode: DriveAccessoryMode


class CounterRequest(BaseModel):
    accessory: DriveAccessoryMode
    direction: str = Field(..., pattern="^(add|subtract)$")


# ============================================================================
# Routes
# ============================================================================


@router.post("/tab", response_model=APIResponse, summary="切換頁籤")
async def activate_tab(request: TabRequest, session: SessionDep) -> dict:
    session.detail_config.activate_tab(request.tab)
    return snapshot_response(session, f"已切換至 {request.tab.value}")


@router.post("/cells/click", response_model=APIResponse, summary="點選儲存格")
async def click_cell(request: CellRequest, session: SessionDep) -> dict:
    """依目前模式處理點選；可能產生確認請求."""
    ensure_row(session, request.row_index)
    session.detail_config.handle_table_cell_click(request.row_index, request.column)
    return snapshot_response(session, "已處理")


@router.post("/rows/{row_index}/select", response_model=APIResponse, summary="選取列（Light-Filter）")
async def select_row(row_index: int, session: SessionDep) -> dict:
    ensure_row(session, row_index)
    session.detail_config.handle_sequence_cell_click(row_index)
    return snapshot_response(session, "選取已更新")


# ===== K1 =====


@router.post("/location/toggle", response_model=APIResponse, summary="切換安裝處所輸入模式")
async def toggle_location(session: SessionDep) -> dict:
    entering = session.detail_config.toggle_location_mode()
    return snapshot_response(session, "進入安裝處所輸入" if entering else "離開安裝處所輸入")


@router.post("/location", response_model=APIResponse, summary="寫入安裝處所")
async def enter_location(request: TextValueRequest, session: SessionDep) -> dict:
    saved = session.detail_config.handle_location_enter(request.value)
    return snapshot_response(session, "已寫入" if saved else "沒有輸入目標")


# ===== K2 =====


@router.post("/fabric", response_model=APIResponse, summary="依布料類型設定布料")
async def update_fabric(request: FabricByTypeRequest, session: SessionDep) -> dict:
    changed = session.detail_config.update_fabric_by_type(
        request.fabric_type, request.fabric, request.color
    )
    return snapshot_response(session, "已更新" if changed else "未變更")


@router.post("/lf/toggle", response_model=APIResponse, summary="切換 Light-Filter 選取模式")
async def toggle_lf(session: SessionDep) -> dict:
    session.detail_config.toggle_lf_edit_mode()
    return snapshot_response(session, "Light-Filter 模式已切換")


@router.post("/lf/apply", response_model=APIResponse, summary="套用 Light-Filter")
async def apply_lf(request: LightFilterRequest, session: SessionDep) -> dict:
    applied = session.detail_config.apply_lf_properties(request.fabric, request.color)
    return snapshot_response(session, "已套用" if applied else "未套用")


@router.post("/lf/delete-toggle", response_model=APIResponse, summary="切換 Light-Filter 移除模式")
async def toggle_lf_delete(session: SessionDep) -> dict:
    session.detail_config.toggle_lf_delete_mode()
    return snapshot_response(session, "Light-Filter 移除模式已切換")


@router.post("/lf/remove", response_model=APIResponse, summary="移除 Light-Filter")
async def remove_lf(session: SessionDep) -> dict:
    removed = session.detail_config.remove_lf_properties()
    return snapshot_response(session, "已移除" if removed else "未移除")


# ===== K3 =====


@router.post("/k3/toggle", response_model=APIResponse, summary="切換 K3 編輯模式")
async def toggle_k3(session: SessionDep) -> dict:
    session.detail_config.toggle_k3_edit_mode()
    return snapshot_response(session, "K3 編輯模式已切換")


@router.post("/k3/batch-cycle", response_model=APIResponse, summary="K3 批次切換")
async def batch_cycle(request: ColumnRequest, session: SessionDep) -> dict:
    if request.column not in K3_COLUMNS:
        raise_error(ErrorCode.INVALID_FIELD, f"無效的欄位名稱: {request.column}")
    changed = session.detail_config.batch_cycle(request.column)
    return snapshot_response(session, "已切換" if changed else "未變更")


# ===== 雙層支架 / 拉繩 =====


@router.post("/dual-chain/mode", response_model=APIResponse, summary="切換雙層支架 / 拉繩模式")
async def dual_chain_mode(request: DualChainModeRequest, session: SessionDep) -> dict:
    switched = session.dual_chain.handle_mode_change(request.mode)
    return snapshot_response(session, "模式已切換" if switched else "模式未切換")


@router.post("/dual-chain/chain", response_model=APIResponse, summary="寫入拉繩長度")
async def enter_chain(request: TextValueRequest, session: SessionDep) -> dict:
    saved = session.dual_chain.handle_chain_enter(request.value)
    return snapshot_response(session, "已寫入" if saved else "未寫入")


# ===== 驅動與配件 =====


@router.post("/drive/mode", response_model=APIResponse, summary="切換驅動與配件模式")
async def drive_mode(request: DriveModeRequest, session: SessionDep) -> dict:
    session.drive_accessories.handle_mode_change(request.mode)
    return snapshot_response(session, "模式已切換")


@router.post("/drive/counter", response_model=APIResponse, summary="增減配件數量")
async def change_counter(request: CounterRequest, session: SessionDep) -> dict:
    """有電動馬達時將遙控器 / 充電器減為 0 會產生確認請求."""
    session.drive_accessories.handle_counter_change(request.accessory, request.direction)
    return snapshot_response(session, "數量已更新")
