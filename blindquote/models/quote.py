"""Quote document data model."""

from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Optional, Literal

from .line_item import LineItem


class AccessoryEntry(BaseModel):
    """單一配件彙總（數量與總價）."""

    count: int = Field(0, ge=0, description="數量")
    price: float = Field(0, description="總價")


class RemoteEntry(AccessoryEntry):
    """遙控器彙總."""

    type: str = Field("standard", description="遙控器型號")


class AccessorySummary(BaseModel):
    """配件彙總，由計價服務整批覆寫."""

    winder: AccessoryEntry = Field(default_factory=AccessoryEntry, description="強化捲軸器")
    motor: AccessoryEntry = Field(default_factory=AccessoryEntry, description="電動馬達")
    remote: RemoteEntry = Field(default_factory=RemoteEntry, description="遙控器")
    charger: AccessoryEntry = Field(default_factory=AccessoryEntry, description="充電器")
    cord3m: AccessoryEntry = Field(default_factory=AccessoryEntry, description="3 米延長線")
    dual: AccessoryEntry = Field(default_factory=AccessoryEntry, description="雙層支架（成對）")

    def entries(self) -> List[AccessoryEntry]:
        """所有配件項目."""
        return [self.winder, self.motor, self.remote, self.charger, self.cord3m, self.dual]

    @property
    def total_price(self) -> float:
        return sum(entry.price or 0 for entry in self.entries())


class Summary(BaseModel):
    """報價總結."""

    total_sum: Optional[float] = Field(None, description="總價；None 表示需重新計算")
    accessories: AccessorySummary = Field(default_factory=AccessorySummary)


class Customer(BaseModel):
    """客戶資訊."""

    name: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""


class QuoteDocument(BaseModel):
    """報價單文件（單一工作階段內的可變文件）."""

    items: List[LineItem] = Field(default_factory=lambda: [LineItem()], description="報價項目列表")
    summary: Summary = Field(default_factory=Summary)

    # 報價單後設資料
    quote_id: Optional[str] = Field(None, description="報價單編號")
    issue_date: Optional[str] = Field(None, description="開立日期")
    due_date: Optional[str] = Field(None, description="有效期限")
    status: Literal["Configuring", "Confirmed", "Cancelled"] = Field(
        "Configuring", description="報價單狀態"
    )
    customer: Customer = Field(default_factory=Customer)

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {
            "example": {
                "items": [
                    {"id": "item-1", "width": 1500, "height": 1800, "fabric_type": "BO"},
                    {"id": "item-2"},
                ],
                "summary": {"total_sum": None},
                "status": "Configuring",
            }
        }


class AccessoryKind(str, Enum):
    """可計價配件種類."""

    DUAL = "dual"
    WINDER = "winder"
    MOTOR = "motor"
    REMOTE = "remote"
    CHARGER = "charger"
    CORD = "cord"
