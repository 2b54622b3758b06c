"""Roller blind line item data model.

One row of the quote table. Dimensions and fabric type drive pricing;
the remaining columns are detail attributes edited on the K1-K5 tabs:
K1: location, K2: fabric / color, K3: over / oi / lr,
K4: winder / motor, K5: dual / chain.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
import uuid


PRICING_FIELDS = ("width", "height", "fabric_type")

WINDER_HEAVY_DUTY = "HD"
DUAL_BRACKET = "D"


def new_item_id() -> str:
    """產生新的項目識別碼."""
    return f"item-{uuid.uuid4().hex}"


class LineItem(BaseModel):
    """捲簾報價項目資料模型."""

    # 主鍵（建立時產生，永不重新指派）
    id: str = Field(default_factory=new_item_id, description="唯一識別碼")

    # 報價欄位
    width: Optional[int] = Field(None, gt=0, description="寬度 (mm)")
    height: Optional[int] = Field(None, gt=0, description="高度 (mm)")
    fabric_type: Optional[str] = Field(None, description="布料類型代碼，如 BO、BO1、SN")
    line_price: Optional[float] = Field(None, description="計算後單行價格（衍生值）")

    # K1 / K2
    location: str = Field("", description="安裝處所")
    fabric: str = Field("", description="布料名稱")
    color: str = Field("", description="布料顏色")

    # K3
    over: str = Field("", description="正反捲 (O / '')")
    oi: str = Field("", description="內外裝 (IN / OUT)")
    lr: str = Field("", description="左右拉繩 (L / R)")

    # K5
    dual: str = Field("", description="雙層支架 (D / '')")
    chain: Optional[int] = Field(None, gt=0, description="拉繩長度 (mm)")

    # K4
    winder: str = Field("", description="強化捲軸器 (HD / '')")
    motor: str = Field("", description="電動馬達（非空即為電動）")

    @field_validator("fabric_type")
    @classmethod
    def validate_fabric_type(cls, v: Optional[str]) -> Optional[str]:
        """空字串視為未設定."""
        if v is not None and not v.strip():
            return None
        return v

    @property
    def is_empty(self) -> bool:
        """寬、高、布料類型皆未設定."""
        return not self.width and not self.height and not self.fabric_type

    @property
    def has_dimensions(self) -> bool:
        return bool(self.width or self.height)

    @property
    def is_priceable(self) -> bool:
        return bool(self.width and self.height and self.fabric_type)

    @property
    def area(self) -> Optional[int]:
        """面積 (mm²)，寬高皆有值時才計算."""
        if self.width and self.height:
            return self.width * self.height
        return None

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {
            "example": {
                "id": "item-3f1c2a9e0b7d4c59a1e2f3b4c5d6e7f8",
                "width": 1500,
                "height": 1800,
                "fabric_type": "BO",
                "line_price": 150.0,
                "location": "Living room",
                "fabric": "Sunset",
                "color": "Ivory",
                "over": "",
                "oi": "IN",
                "lr": "L",
                "dual": "",
                "chain": 1200,
                "winder": "",
                "motor": "",
            }
        }
