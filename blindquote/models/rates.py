"""Rate source data models.

A rate source document is supplied once by an external loader and never
mutated afterwards:

    matrices:
      BO:
        widths: [1000, 2000, 3000]
        drops: [1000, 2000]
        prices: [[100, 150, 200], [120, 170, 220]]
    accessories:
      winderHD: {price: 150}
    fabric_type_sequence: [BO, BO1, SN]
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Dict, List


class RateMatrix(BaseModel):
    """單一布料類型的價格矩陣（prices[drop_index][width_index]）."""

    widths: List[int] = Field(..., description="寬度級距（遞增）")
    drops: List[int] = Field(..., description="高度級距（遞增）")
    prices: List[List[float]] = Field(..., description="價格表，以 [高度][寬度] 索引")

    @field_validator("widths", "drops")
    @classmethod
    def validate_ascending(cls, v: List[int]) -> List[int]:
        """級距必須嚴格遞增."""
        if any(b <= a for a, b in zip(v, v[1:])):
            raise ValueError("級距必須遞增")
        return v

    @model_validator(mode="after")
    def validate_row_count(self) -> "RateMatrix":
        if len(self.prices) > len(self.drops):
            raise ValueError("價格表列數超過高度級距數")
        return self

    class Config:
        """Pydantic configuration."""
        frozen = True


class AccessoryPrice(BaseModel):
    """配件單價."""

    price: float = Field(..., ge=0, description="單價")
    name: str = Field("", description="顯示名稱")

    class Config:
        """Pydantic configuration."""
        frozen = True


class RateSource(BaseModel):
    """外部載入的價目表文件."""

    matrices: Dict[str, RateMatrix] = Field(default_factory=dict)
    accessories: Dict[str, AccessoryPrice] = Field(default_factory=dict)
    fabric_type_sequence: List[str] = Field(default_factory=list)

    class Config:
        """Pydantic configuration."""
        frozen = True


class ValidationRule(BaseModel):
    """手動輸入尺寸的上下限（含端點）."""

    min: int
    max: int
    name: str

    def accepts(self, value: int) -> bool:
        return self.min <= value <= self.max

    @property
    def message(self) -> str:
        return f"{self.name} must be between {self.min} and {self.max}."

    class Config:
        """Pydantic configuration."""
        frozen = True
