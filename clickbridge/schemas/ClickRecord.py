from pydantic import BaseModel
from datetime import datetime
from typing import Optional

class ClickRecord(BaseModel):
    # synthetic row number, assigned by the store on insert
    id: Optional[int] = None
    cid: str
    slug: str
    created_at: datetime
    twclid: Optional[str] = None
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    utm_content: Optional[str] = None
    user_agent: Optional[str] = None
    referer: Optional[str] = None
    # sha256 of client address + salt, raw addresses are never stored
    ip_hash: Optional[str] = None

    model_config = {"from_attributes": True}
