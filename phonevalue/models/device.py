from typing import Optional
from pydantic import BaseModel, ConfigDict


class DeviceQuery(BaseModel):
    """Search terms handed to every price source."""

    model_config = ConfigDict(frozen=True)

    brand: str
    model: str
    storage: str
    grade: Optional[str] = None
