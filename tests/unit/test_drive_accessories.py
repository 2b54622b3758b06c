"""DriveAccessoriesWorkflow 單元測試."""

import pytest

from blindquote.models import DriveAccessoryMode, LineItem, QuoteDocument
from blindquote.services.drive_accessories import (
    DRIVE_ACCESSORY_COLUMNS,
    HINT_MESSAGES,
    MOTOR_TO_WINDER_MESSAGE,
    WINDER_TO_MOTOR_MESSAGE,
)
from blindquote.services.session import QuoteSession


@pytest.fixture
def drive_session(product_factory, catalog, make_document) -> QuoteSession:
    document = make_document((1000, 1000, "BO"), (1500, 1000, "BO"), (2000, 1000, "BO"))
    return QuoteSession(product_factory, catalog, initial_document=document)


@pytest.fixture
def motor_session(product_factory, catalog) -> QuoteSession:
    """第一列已設定電動馬達，第二列已設定 HD."""
    document = QuoteDocument(
        items=[
            LineItem(width=1000, height=1000, fabric_type="BO", motor="Motor"),
            LineItem(width=1000, height=1000, fabric_type="BO", winder="HD"),
            LineItem(),
        ]
    )
    return QuoteSession(product_factory, catalog, initial_document=document)


class TestModeChange:
    """測試模式切換與提示."""

    def test_entering_mode_posts_hint(self, drive_session):
        drive_session.drive_accessories.handle_mode_change("winder")

        assert drive_session.ui_service.get_state().drive_accessory_mode is DriveAccessoryMode.WINDER
        messages = [n.message for n in drive_session.drain_notifications()]
        assert messages == [HINT_MESSAGES[DriveAccessoryMode.WINDER]]

    def test_same_mode_toggles_off(self, drive_session):
        drive_session.drive_accessories.handle_mode_change("cord")
        drive_session.drive_accessories.handle_mode_change("cord")

        assert drive_session.ui_service.get_state().drive_accessory_mode is DriveAccessoryMode.NONE

    def test_motor_present_defaults_remote_to_one(self, motor_session):
        motor_session.drive_accessories.handle_mode_change("remote")
        assert motor_session.ui_service.get_drive_accessory_count(DriveAccessoryMode.REMOTE) == 1

    def test_no_motor_keeps_remote_at_zero(self, drive_session):
        drive_session.drive_accessories.handle_mode_change("charger")
        assert drive_session.ui_service.get_drive_accessory_count(DriveAccessoryMode.CHARGER) == 0

    def test_activate_sets_columns(self, drive_session):
        drive_session.drive_accessories.activate()
        assert drive_session.ui_service.get_state().visible_columns == DRIVE_ACCESSORY_COLUMNS


class TestDriveCells:
    """測試捲軸器 / 馬達設定."""

    def test_toggle_winder(self, drive_session):
        drive_session.drive_accessories.handle_mode_change("winder")

        drive_session.drive_accessories.handle_table_cell_click(0, "winder")
        assert drive_session.quote_service.get_item(0).winder == "HD"

        drive_session.drive_accessories.handle_table_cell_click(0, "winder")
        assert drive_session.quote_service.get_item(0).winder == ""

    def test_click_other_column_is_ignored(self, drive_session):
        drive_session.drive_accessories.handle_mode_change("winder")

        assert drive_session.drive_accessories.handle_table_cell_click(0, "motor") is None
        assert drive_session.quote_service.get_item(0).motor == ""

    def test_winder_over_motor_requires_confirmation(self, motor_session):
        motor_session.drive_accessories.handle_mode_change("winder")

        request = motor_session.drive_accessories.handle_table_cell_click(0, "winder")

        assert request.message == MOTOR_TO_WINDER_MESSAGE
        assert motor_session.quote_service.get_item(0).motor == "Motor"

        motor_session.confirm(request.id, accepted=True)
        item = motor_session.quote_service.get_item(0)
        assert (item.winder, item.motor) == ("HD", "")

    def test_declined_motor_over_winder(self, motor_session):
        motor_session.drive_accessories.handle_mode_change("motor")

        request = motor_session.drive_accessories.handle_table_cell_click(1, "motor")
        assert request.message == WINDER_TO_MOTOR_MESSAGE

        motor_session.confirm(request.id, accepted=False)
        item = motor_session.quote_service.get_item(1)
        assert (item.winder, item.motor) == ("HD", "")


    def test_confirmed_toggle_follows_row_after_delete(self, product_factory, catalog):
        """確認前刪除其他列，確認後仍套用到原本提出的那一列."""
        document = QuoteDocument(
            items=[
                LineItem(width=1200, height=1000, fabric_type="BO"),
                LineItem(width=1000, height=1000, fabric_type="BO", motor="Motor"),
                LineItem(),
            ]
        )
        session = QuoteSession(product_factory, catalog, initial_document=document)
        session.drive_accessories.handle_mode_change("winder")
        request = session.drive_accessories.handle_table_cell_click(1, "winder")

        session.quick_quote.handle_sequence_cell_click(0)
        session.quick_quote.delete_row()
        session.confirm(request.id, accepted=True)

        item = session.quote_service.get_item(0)
        assert (item.width, item.winder, item.motor) == (1000, "HD", "")
        assert session.quote_service.get_item(1).is_empty

    def test_confirmed_toggle_on_deleted_row_is_noop(self, motor_session):
        motor_session.drive_accessories.handle_mode_change("winder")
        request = motor_session.drive_accessories.handle_table_cell_click(0, "winder")

        motor_session.quick_quote.handle_sequence_cell_click(0)
        motor_session.quick_quote.delete_row()

        assert motor_session.confirm(request.id, accepted=True)
        item = motor_session.quote_service.get_item(0)
        assert (item.winder, item.motor) == ("HD", "")

class TestCounters:
    """測試配件數量增減."""

    def test_add_and_subtract_cord(self, drive_session):
        workflow = drive_session.drive_accessories
        workflow.handle_counter_change("cord", "add")
        workflow.handle_counter_change("cord", "add")
        workflow.handle_counter_change("cord", "subtract")

        assert drive_session.ui_service.get_drive_accessory_count(DriveAccessoryMode.CORD) == 1

    def test_count_never_negative(self, drive_session):
        drive_session.drive_accessories.handle_counter_change("remote", "subtract")
        assert drive_session.ui_service.get_drive_accessory_count(DriveAccessoryMode.REMOTE) == 0

    def test_removing_last_remote_with_motor_requires_confirmation(self, motor_session):
        motor_session.drive_accessories.handle_mode_change("remote")

        request = motor_session.drive_accessories.handle_counter_change("remote", "subtract")

        assert request.confirm_label == "確定不要"
        assert "遙控器" in request.message
        assert motor_session.ui_service.get_drive_accessory_count(DriveAccessoryMode.REMOTE) == 1

        motor_session.confirm(request.id, accepted=True)
        assert motor_session.ui_service.get_drive_accessory_count(DriveAccessoryMode.REMOTE) == 0

    def test_winder_has_no_counter(self, drive_session):
        assert drive_session.drive_accessories.handle_counter_change("winder", "add") is None


class TestRecalculation:
    """測試離開模式時重新計價."""

    def test_exit_recalculates_all_accessories(self, drive_session):
        workflow = drive_session.drive_accessories
        workflow.handle_mode_change("winder")
        workflow.handle_table_cell_click(0, "winder")
        workflow.handle_mode_change("motor")
        workflow.handle_table_cell_click(1, "motor")
        workflow.handle_mode_change("remote")
        workflow.handle_mode_change("remote")

        state = drive_session.ui_service.get_state()
        assert state.drive_total_prices.winder == 100
        assert state.drive_total_prices.motor == 250
        assert state.drive_total_prices.remote == 100
        assert state.drive_grand_total == 450
        assert state.is_sum_outdated

        accessories = drive_session.quote_service.get_quote_data().summary.accessories
        assert (accessories.remote.count, accessories.remote.price) == (1, 100)
        assert accessories.total_price == 450

    def test_dual_price_is_carried_into_summary(self, drive_session):
        drive_session.ui_service.set_dual_price(200)
        drive_session.drive_accessories.handle_mode_change("cord")
        drive_session.drive_accessories.handle_counter_change("cord", "add")
        drive_session.drive_accessories.handle_mode_change("cord")

        state = drive_session.ui_service.get_state()
        assert state.drive_grand_total == 15

        accessories = drive_session.quote_service.get_quote_data().summary.accessories
        assert accessories.dual.price == 200
        assert accessories.total_price == 215

    def test_total_includes_accessories_after_calculate(self, drive_session):
        drive_session.drive_accessories.handle_counter_change("cord", "add")
        drive_session.drive_accessories.recalculate_prices()

        result = drive_session.calculate_and_sum()

        assert result.document.summary.total_sum == 100 + 150 + 150 + 15
