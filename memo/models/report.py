from typing import Optional
from pydantic import BaseModel, Field


class FetchReport(BaseModel):
    url: str
    elapsed: float = Field(..., description="Seconds spent in Memo.get")
    size: Optional[int] = None
    error: Optional[str] = None
