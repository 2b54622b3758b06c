"""DualChainWorkflow 單元測試."""

import pytest

from blindquote.models import DualChainMode, NotificationType
from blindquote.services.dual_chain import (
    DUAL_CHAIN_COLUMNS,
    ODD_DUAL_MESSAGE,
    POSITIVE_INTEGER_MESSAGE,
)
from blindquote.services.session import QuoteSession


@pytest.fixture
def six_row_session(product_factory, catalog, make_document) -> QuoteSession:
    rows = [(1000 + i * 100, 1000, "BO") for i in range(6)]
    return QuoteSession(product_factory, catalog, initial_document=make_document(*rows))


def _mark_dual(session: QuoteSession, count: int) -> None:
    for index in range(count):
        session.dual_chain.handle_table_cell_click(index, "dual")


class TestDualMode:
    """測試雙層支架模式."""

    def test_toggle_d_in_dual_mode(self, six_row_session):
        six_row_session.dual_chain.handle_mode_change(DualChainMode.DUAL)
        six_row_session.dual_chain.handle_table_cell_click(0, "dual")
        assert six_row_session.quote_service.get_item(0).dual == "D"

        six_row_session.dual_chain.handle_table_cell_click(0, "dual")
        assert six_row_session.quote_service.get_item(0).dual == ""

    def test_click_outside_dual_mode_is_ignored(self, six_row_session):
        six_row_session.dual_chain.handle_table_cell_click(0, "dual")
        assert six_row_session.quote_service.get_item(0).dual == ""

    def test_odd_count_blocks_exit(self, six_row_session):
        six_row_session.dual_chain.handle_mode_change("dual")
        _mark_dual(six_row_session, 5)

        assert not six_row_session.dual_chain.handle_mode_change("dual")

        state = six_row_session.ui_service.get_state()
        assert state.dual_chain_mode is DualChainMode.DUAL
        assert state.dual_price is None
        notification = six_row_session.drain_notifications()[-1]
        assert notification.message == ODD_DUAL_MESSAGE
        assert notification.type is NotificationType.ERROR

    def test_even_count_prices_pairs(self, six_row_session):
        six_row_session.dual_chain.handle_mode_change("dual")
        _mark_dual(six_row_session, 6)

        assert six_row_session.dual_chain.handle_mode_change("dual")

        state = six_row_session.ui_service.get_state()
        assert state.dual_chain_mode is DualChainMode.NONE
        assert state.dual_price == 300
        assert state.summary_accessories_total == 300
        assert state.is_sum_outdated

        summary = six_row_session.quote_service.get_quote_data().summary
        assert (summary.accessories.dual.count, summary.accessories.dual.price) == (3, 300)
        assert summary.total_sum is None

    def test_switching_to_chain_validates_dual_first(self, six_row_session):
        six_row_session.dual_chain.handle_mode_change("dual")
        _mark_dual(six_row_session, 1)

        assert not six_row_session.dual_chain.handle_mode_change("chain")
        assert six_row_session.ui_service.get_state().dual_chain_mode is DualChainMode.DUAL

    def test_entering_dual_clears_previous_price(self, six_row_session):
        six_row_session.ui_service.set_dual_price(200)
        six_row_session.dual_chain.handle_mode_change("dual")
        assert six_row_session.ui_service.get_state().dual_price is None


class TestChainMode:
    """測試拉繩長度輸入."""

    def test_enter_positive_integer(self, six_row_session):
        six_row_session.dual_chain.handle_mode_change("chain")
        six_row_session.dual_chain.handle_table_cell_click(2, "chain")

        assert six_row_session.dual_chain.handle_chain_enter("1200")

        assert six_row_session.quote_service.get_item(2).chain == 1200
        state = six_row_session.ui_service.get_state()
        assert state.target_cell is None
        assert state.dual_chain_input_value == ""

    @pytest.mark.parametrize("value", ["abc", "-5", "0", "12.5", "\u00b2"])
    def test_invalid_values_are_rejected(self, six_row_session, value):
        six_row_session.dual_chain.handle_mode_change("chain")
        six_row_session.dual_chain.handle_table_cell_click(0, "chain")

        assert not six_row_session.dual_chain.handle_chain_enter(value)

        assert six_row_session.quote_service.get_item(0).chain is None
        assert six_row_session.drain_notifications()[-1].message == POSITIVE_INTEGER_MESSAGE

    def test_blank_clears_chain(self, six_row_session):
        six_row_session.dual_chain.handle_mode_change("chain")
        six_row_session.dual_chain.handle_table_cell_click(1, "chain")
        six_row_session.dual_chain.handle_chain_enter("800")

        six_row_session.dual_chain.handle_table_cell_click(1, "chain")
        assert six_row_session.ui_service.get_state().dual_chain_input_value == "800"
        assert six_row_session.dual_chain.handle_chain_enter("  ")

        assert six_row_session.quote_service.get_item(1).chain is None

    def test_enter_without_target_is_ignored(self, six_row_session):
        assert not six_row_session.dual_chain.handle_chain_enter("100")

    def test_leaving_chain_mode_clears_target(self, six_row_session):
        six_row_session.dual_chain.handle_mode_change("chain")
        six_row_session.dual_chain.handle_table_cell_click(1, "chain")
        six_row_session.dual_chain.handle_mode_change("chain")

        state = six_row_session.ui_service.get_state()
        assert state.dual_chain_mode is DualChainMode.NONE
        assert state.target_cell is None


class TestActivate:
    """測試進入頁籤."""

    def test_activate_syncs_summary(self, six_row_session):
        six_row_session.ui_service.set_drive_accessory_total_price("remote", 100)
        six_row_session.ui_service.set_dual_price(200)

        six_row_session.dual_chain.activate()

        state = six_row_session.ui_service.get_state()
        assert state.visible_columns == DUAL_CHAIN_COLUMNS
        assert state.summary_prices.remote == 100
        assert state.summary_accessories_total == 300
