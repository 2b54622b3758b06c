"""Rate Catalog - 價目表查詢服務.

唯讀查詢布料價格矩陣與配件單價，並提供布料類型循環順序。
載入前或查無資料時一律回傳 None / 空列表，不拋出例外；
呼叫端將其視為可恢復的「查無資料」。
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import ValidationError

from ..config import settings
from ..models.rates import RateMatrix, RateSource
from .service_factory import service_factory

logger = logging.getLogger(__name__)


# ============================================================
# 例外定義（僅由載入流程拋出）
# ============================================================


class RateSourceNotFoundError(Exception):
    """價目表檔案不存在."""

    pass


class RateSourceParseError(Exception):
    """價目表檔案解析失敗."""

    pass


# ============================================================
# 載入
# ============================================================


def load_rate_source(path: Union[str, Path]) -> RateSource:
    """讀取價目表檔案（YAML；JSON 亦相容）.

    Args:
        path: 價目表檔案路徑

    Returns:
        RateSource 文件

    Raises:
        RateSourceNotFoundError: 找不到檔案
        RateSourceParseError: 檔案解析或驗證失敗
    """
    path = Path(path)
    if not path.exists():
        raise RateSourceNotFoundError(f"找不到價目表檔案: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise RateSourceParseError(f"YAML 解析失敗: {e}")

    if not isinstance(data, dict):
        raise RateSourceParseError(f"價目表格式錯誤: {path}")

    try:
        return RateSource(**data)
    except ValidationError as e:
        raise RateSourceParseError(f"價目表驗證失敗: {e}")


# ============================================================
# Rate Catalog
# ============================================================


class RateCatalog:
    """價目表查詢服務.

    使用方式：
        catalog = RateCatalog()
        catalog.load(rate_source)
        matrix = catalog.get_rate_matrix("BO")
    """

    def __init__(self, source: Optional[RateSource] = None):
        self._source: Optional[RateSource] = None
        if source is not None:
            self.load(source)

    @property
    def is_ready(self) -> bool:
        return self._source is not None

    def load(self, source: RateSource) -> None:
        """載入價目表（僅一次；之後不可變更）."""
        if self._source is not None:
            logger.warning("價目表已載入，忽略重複載入")
            return
        self._source = source
        logger.info(
            f"價目表載入完成: {len(source.matrices)} 種布料, "
            f"{len(source.accessories)} 項配件"
        )

    def load_from_file(self, path: Union[str, Path]) -> None:
        """從檔案載入價目表.

        Raises:
            RateSourceNotFoundError: 找不到檔案
            RateSourceParseError: 檔案解析失敗
        """
        self.load(load_rate_source(path))

    def get_rate_matrix(self, fabric_type: Optional[str]) -> Optional[RateMatrix]:
        """取得布料類型的價格矩陣；未載入或查無資料時回傳 None."""
        if self._source is None:
            logger.error("價目表尚未載入，無法取得價格矩陣")
            return None
        if not fabric_type:
            return None
        matrix = self._source.matrices.get(fabric_type)
        if matrix is None:
            logger.warning(f"找不到布料類型的價格矩陣: {fabric_type}")
        return matrix

    def get_accessory_unit_price(self, key: str) -> Optional[float]:
        """取得配件單價；未載入或查無資料時回傳 None."""
        if self._source is None:
            logger.error("價目表尚未載入，無法取得配件單價")
            return None
        accessory = self._source.accessories.get(key)
        if accessory is None:
            logger.error(f"找不到配件單價: '{key}'")
            return None
        return accessory.price

    def get_fabric_type_sequence(self) -> List[str]:
        """取得布料類型循環順序（回傳副本）；未載入時回傳空列表."""
        if self._source is None:
            logger.error("價目表尚未載入，布料類型順序為空")
            return []
        return list(self._source.fabric_type_sequence)


# ============================================================
# 單例工廠
# ============================================================


@service_factory
def get_rate_catalog(source_path: Optional[str] = None) -> RateCatalog:
    """取得 RateCatalog 單例.

    載入失敗時記錄錯誤並回傳未就緒的目錄，計價會降級為查無資料。

    Args:
        source_path: 價目表路徑，預設使用 settings.rate_source_file

    Returns:
        RateCatalog 實例
    """
    catalog = RateCatalog()
    path = Path(source_path) if source_path else settings.rate_source_file
    try:
        catalog.load_from_file(path)
    except (RateSourceNotFoundError, RateSourceParseError) as e:
        logger.error(f"價目表載入失敗，計價將無法使用: {e}")
    return catalog
