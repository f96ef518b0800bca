from pydantic import BaseModel
from datetime import datetime
from typing import Optional, List

class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    warnings: Optional[List[str]] = None
