from typing import Optional
from pydantic import BaseModel

class QuoteResponse(BaseModel):
    ourPrice: int
    cexPrice: float
    musicMagpiePrice: float
    # only present when no offer could be made
    message: Optional[str] = None

class ErrorResponse(BaseModel):
    error: str
