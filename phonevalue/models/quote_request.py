from pydantic import BaseModel, ConfigDict, Field
from phonevalue.models.device import DeviceQuery

class DeviceCondition(BaseModel):
    screen_condition: int = Field(..., ge=1, le=4, description="1 (poor) to 4 (flawless)")
    body_condition: int = Field(..., ge=1, le=4, description="1 (poor) to 4 (flawless)")
    fully_functional: bool
    camera_works: bool
    battery_health: bool
    original_box: bool
    charger_included: bool

class DeviceDetails(BaseModel):
    # a v1 body must not carry a grade, nor a v2 body a condition
    model_config = ConfigDict(extra="forbid")

    brand: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    storage: str = Field(..., min_length=1, description="e.g. 128GB")

class QuoteRequestV1(DeviceDetails):
    condition: DeviceCondition

    def to_query(self) -> DeviceQuery:
        return DeviceQuery(brand=self.brand, model=self.model, storage=self.storage)

class QuoteRequestV2(DeviceDetails):
    grade: str = Field(..., min_length=1, description="CeX grade letter, e.g. A, B or C")

    def to_query(self) -> DeviceQuery:
        return DeviceQuery(
            brand=self.brand, model=self.model, storage=self.storage, grade=self.grade
        )
