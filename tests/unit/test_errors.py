"""APIError 單元測試."""

import pytest

from blindquote.utils import APIError, ErrorCode, raise_error


class TestAPIError:
    """測試預設訊息與狀態碼."""

    @pytest.mark.parametrize(
        "code, status",
        [
            (ErrorCode.SESSION_NOT_FOUND, 404),
            (ErrorCode.CATALOG_NOT_READY, 503),
            (ErrorCode.INVALID_FIELD, 400),
            (ErrorCode.INTERNAL_ERROR, 500),
        ],
    )
    def test_default_status(self, code, status):
        assert APIError(code).status_code == status

    def test_explicit_status_and_message(self):
        error = APIError(ErrorCode.INVALID_REQUEST, "bad", status_code=409, details={"a": 1})

        assert error.status_code == 409
        assert str(error) == "bad"
        assert error.to_dict() == {
            "message": "bad",
            "error_code": "INVALID_REQUEST",
            "details": {"a": 1},
        }

    def test_raise_error_uses_default_message(self):
        with pytest.raises(APIError) as exc_info:
            raise_error(ErrorCode.ROW_NOT_FOUND)

        assert exc_info.value.message == "找不到指定的列"
        assert exc_info.value.status_code == 404
