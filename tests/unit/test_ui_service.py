"""UIService 單元測試."""

from blindquote.models import (
    AccessoryPrices,
    Cell,
    DetailTab,
    DriveAccessoryMode,
    DualChainMode,
    EditMode,
    UIState,
    View,
)
from blindquote.services.ui_service import UIService


class TestInputBuffer:
    """測試作用中儲存格與輸入緩衝."""

    def test_set_active_cell_sets_input_mode(self, ui_service):
        ui_service.set_active_cell(2, "height")
        state = ui_service.get_state()

        assert state.active_cell == Cell(row_index=2, column="height")
        assert state.input_mode == "height"

    def test_append_and_delete(self, ui_service):
        for key in "1250":
            ui_service.append_input_value(key)
        ui_service.delete_last_input_char()
        assert ui_service.get_state().input_value == "125"

        ui_service.clear_input_value()
        ui_service.delete_last_input_char()
        assert ui_service.get_state().input_value == ""

    def test_set_input_value_stringifies(self, ui_service):
        ui_service.set_input_value(1500)
        assert ui_service.get_state().input_value == "1500"
        ui_service.set_input_value(None)
        assert ui_service.get_state().input_value == ""
        ui_service.set_input_value(0)
        assert ui_service.get_state().input_value == "0"
        ui_service.set_dual_chain_input_value(0)
        assert ui_service.get_state().dual_chain_input_value == "0"


class TestSelection:
    """測試列選取與多列刪除狀態機."""

    def test_toggle_row_selection(self, ui_service):
        ui_service.toggle_row_selection(1)
        assert ui_service.get_state().selected_row_index == 1
        ui_service.toggle_row_selection(1)
        assert ui_service.get_state().selected_row_index is None

    def test_entering_multi_delete_seeds_selected_row(self, ui_service):
        ui_service.toggle_row_selection(2)

        assert ui_service.toggle_multi_delete_mode() is True

        state = ui_service.get_state()
        assert state.is_multi_delete_mode
        assert state.multi_delete_selected_indexes == {2}
        assert state.selected_row_index is None

    def test_entering_without_selection_starts_empty(self, ui_service):
        ui_service.toggle_multi_delete_mode()
        assert ui_service.get_state().multi_delete_selected_indexes == set()

    def test_leaving_multi_delete_clears_set(self, ui_service):
        ui_service.toggle_multi_delete_mode()
        ui_service.toggle_multi_delete_selection(0)
        ui_service.toggle_multi_delete_selection(3)

        assert ui_service.toggle_multi_delete_mode() is False

        state = ui_service.get_state()
        assert not state.is_multi_delete_mode
        assert state.multi_delete_selected_indexes == set()

    def test_toggle_multi_delete_selection(self, ui_service):
        ui_service.toggle_multi_delete_mode()
        ui_service.toggle_multi_delete_selection(1)
        ui_service.toggle_multi_delete_selection(1)
        assert ui_service.get_state().multi_delete_selected_indexes == set()


class TestModesAndCounters:
    """測試模式旗標與配件數量."""

    def test_view_and_tab(self, ui_service):
        ui_service.set_current_view(View.DETAIL_CONFIG)
        ui_service.set_active_tab("k4-tab")
        state = ui_service.get_state()

        assert state.current_view is View.DETAIL_CONFIG
        assert state.active_tab_id is DetailTab.K4

    def test_modes_default_to_none(self, ui_service):
        state = ui_service.get_state()
        assert state.dual_chain_mode is DualChainMode.NONE
        assert state.drive_accessory_mode is DriveAccessoryMode.NONE
        assert state.active_edit_mode is EditMode.NONE

    def test_counts_floor_at_zero(self, ui_service):
        ui_service.set_drive_accessory_count(DriveAccessoryMode.REMOTE, 2)
        ui_service.set_drive_accessory_count(DriveAccessoryMode.REMOTE, -3)

        assert ui_service.get_drive_accessory_count(DriveAccessoryMode.REMOTE) == 0

    def test_count_for_non_counted_accessory_is_ignored(self, ui_service):
        ui_service.set_drive_accessory_count(DriveAccessoryMode.WINDER, 4)
        assert ui_service.get_drive_accessory_count(DriveAccessoryMode.WINDER) == 0

    def test_total_prices(self, ui_service):
        ui_service.set_drive_accessory_total_price(DriveAccessoryMode.MOTOR, 250)
        ui_service.set_drive_accessory_total_price(DriveAccessoryMode.CORD, 30)

        prices = ui_service.get_state().drive_total_prices
        assert prices.motor == 250
        assert prices.total == 280

    def test_summary_values(self, ui_service):
        ui_service.set_summary_prices(AccessoryPrices(winder=100))
        ui_service.set_summary_accessories_total(100)

        state = ui_service.get_state()
        assert state.summary_prices.winder == 100
        assert state.summary_accessories_total == 100

    def test_lf_row_sets(self, ui_service):
        ui_service.toggle_lf_selection(0)
        ui_service.toggle_lf_selection(2)
        ui_service.add_lf_modified_rows([0, 2])
        ui_service.remove_lf_modified_rows([0])

        state = ui_service.get_state()
        assert state.lf_selected_row_indexes == {0, 2}
        assert state.lf_modified_row_indexes == {2}
        assert ui_service.has_lf_modified_rows()

        ui_service.set_lf_rows([1], [3])
        state = ui_service.get_state()
        assert (state.lf_selected_row_indexes, state.lf_modified_row_indexes) == ({1}, {3})


class TestSnapshotsAndReset:
    """測試快照與重設."""

    def test_snapshot_is_detached(self, ui_service):
        snapshot = ui_service.get_state()
        snapshot.multi_delete_selected_indexes.add(5)
        assert ui_service.get_state().multi_delete_selected_indexes == set()

    def test_reset_restores_initial_state(self):
        service = UIService(UIState(active_tab_id=DetailTab.K3))
        service.set_active_tab(DetailTab.K5)
        service.set_dual_price(200)

        service.reset()

        state = service.get_state()
        assert state.active_tab_id is DetailTab.K3
        assert state.dual_price is None
