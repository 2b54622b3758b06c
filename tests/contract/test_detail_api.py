"""Contract tests for detail config API endpoints (K1-K5)."""

import pytest
from fastapi.testclient import TestClient

from blindquote.services.dual_chain import ODD_DUAL_MESSAGE


pytestmark = pytest.mark.contract

API = "/api/v1/sessions"


@pytest.fixture
def session_id(client: TestClient) -> str:
    """兩列 BO 資料 + 結尾空白列."""
    session_id = client.post(API, json={}).json()["data"]["session_id"]
    for row, (width, height) in enumerate([(1200, 1000), (2000, 1000)]):
        client.put(f"{API}/{session_id}/rows/{row}/cells/width", json={"value": width})
        client.put(f"{API}/{session_id}/rows/{row}/cells/height", json={"value": height})
        client.post(f"{API}/{session_id}/cells/click", json={"row_index": row, "column": "TYPE"})
    client.post(f"{API}/{session_id}/view", json={"view": "DETAIL_CONFIG"})
    return session_id


def _detail(session_id: str, path: str) -> str:
    return f"{API}/{session_id}/detail/{path}"


class TestTabEndpoints:
    """Contract tests for tab switching."""

    def test_activate_tab(self, client: TestClient, session_id: str):
        response = client.post(_detail(session_id, "tab"), json={"tab": "k3-tab"})

        ui = response.json()["data"]["ui"]
        assert ui["active_tab_id"] == "k3-tab"
        assert ui["visible_columns"][-3:] == ["over", "oi", "lr"]

    def test_invalid_tab(self, client: TestClient, session_id: str):
        response = client.post(_detail(session_id, "tab"), json={"tab": "k9-tab"})
        assert response.status_code == 422


class TestLocationAndFabric:
    """Contract tests for K1 / K2."""

    def test_location_entry(self, client: TestClient, session_id: str):
        client.post(_detail(session_id, "location/toggle"))
        response = client.post(_detail(session_id, "location"), json={"value": "Kitchen"})

        snapshot = response.json()["data"]
        assert snapshot["document"]["items"][0]["location"] == "Kitchen"
        assert snapshot["ui"]["target_cell"] == {"row_index": 1, "column": "location"}

    def test_light_filter(self, client: TestClient, session_id: str):
        client.post(_detail(session_id, "lf/toggle"))
        client.post(_detail(session_id, "rows/1/select"))
        response = client.post(_detail(session_id, "lf/apply"), json={"fabric": "Alpha", "color": "White"})

        snapshot = response.json()["data"]
        assert snapshot["document"]["items"][1]["fabric"] == "L-Filter Alpha"
        assert snapshot["ui"]["lf_modified_row_indexes"] == [1]

    def test_fabric_by_type(self, client: TestClient, session_id: str):
        response = client.post(
            _detail(session_id, "fabric"),
            json={"fabric_type": "BO", "fabric": "Sunset", "color": "Ivory"},
        )

        items = response.json()["data"]["document"]["items"]
        assert [item["fabric"] for item in items] == ["Sunset", "Sunset", ""]


class TestK3Endpoints:
    """Contract tests for K3 options."""

    def test_batch_cycle(self, client: TestClient, session_id: str):
        response = client.post(_detail(session_id, "k3/batch-cycle"), json={"column": "oi"})

        items = response.json()["data"]["document"]["items"]
        assert [item["oi"] for item in items] == ["IN", "IN", ""]

    def test_batch_cycle_invalid_column(self, client: TestClient, session_id: str):
        response = client.post(_detail(session_id, "k3/batch-cycle"), json={"column": "width"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_FIELD"


class TestDualChainEndpoints:
    """Contract tests for K5 dual brackets and chain length."""

    def test_odd_dual_count_rejected(self, client: TestClient, session_id: str):
        client.post(_detail(session_id, "dual-chain/mode"), json={"mode": "dual"})
        client.post(_detail(session_id, "cells/click"), json={"row_index": 0, "column": "dual"})

        response = client.post(_detail(session_id, "dual-chain/mode"), json={"mode": "dual"})

        snapshot = response.json()["data"]
        assert snapshot["ui"]["dual_chain_mode"] == "dual"
        assert snapshot["notifications"][-1]["message"] == ODD_DUAL_MESSAGE

    def test_even_dual_count_priced(self, client: TestClient, session_id: str):
        client.post(_detail(session_id, "dual-chain/mode"), json={"mode": "dual"})
        for row in (0, 1):
            client.post(_detail(session_id, "cells/click"), json={"row_index": row, "column": "dual"})

        response = client.post(_detail(session_id, "dual-chain/mode"), json={"mode": "dual"})

        snapshot = response.json()["data"]
        assert snapshot["ui"]["dual_price"] == 100
        assert snapshot["document"]["summary"]["accessories"]["dual"] == {"count": 1, "price": 100}

    def test_chain_entry(self, client: TestClient, session_id: str):
        client.post(_detail(session_id, "dual-chain/mode"), json={"mode": "chain"})
        client.post(_detail(session_id, "cells/click"), json={"row_index": 1, "column": "chain"})

        response = client.post(_detail(session_id, "dual-chain/chain"), json={"value": "1500"})

        assert response.json()["data"]["document"]["items"][1]["chain"] == 1500


class TestDriveEndpoints:
    """Contract tests for K4 drive and accessories."""

    def test_winder_and_recalculate(self, client: TestClient, session_id: str):
        client.post(_detail(session_id, "drive/mode"), json={"mode": "winder"})
        client.post(_detail(session_id, "cells/click"), json={"row_index": 0, "column": "winder"})

        response = client.post(_detail(session_id, "drive/mode"), json={"mode": "winder"})

        snapshot = response.json()["data"]
        assert snapshot["document"]["items"][0]["winder"] == "HD"
        assert snapshot["ui"]["drive_total_prices"]["winder"] == 100
        assert snapshot["document"]["summary"]["accessories"]["winder"] == {"count": 1, "price": 100}

    def test_remote_confirmation_with_motor(self, client: TestClient, session_id: str):
        client.post(_detail(session_id, "drive/mode"), json={"mode": "motor"})
        client.post(_detail(session_id, "cells/click"), json={"row_index": 0, "column": "motor"})
        client.post(_detail(session_id, "drive/mode"), json={"mode": "remote"})

        response = client.post(
            _detail(session_id, "drive/counter"), json={"accessory": "remote", "direction": "subtract"}
        )

        snapshot = response.json()["data"]
        assert snapshot["ui"]["drive_remote_count"] == 1
        request = snapshot["pending_confirmations"][0]
        assert request["confirm_label"] == "確定不要"

        response = client.post(
            f"{API}/{session_id}/confirmations/{request['id']}", json={"accepted": True}
        )
        assert response.json()["data"]["ui"]["drive_remote_count"] == 0

    def test_invalid_direction(self, client: TestClient, session_id: str):
        response = client.post(
            _detail(session_id, "drive/counter"), json={"accessory": "cord", "direction": "up"}
        )
        assert response.status_code == 422
