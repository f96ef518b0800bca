from pydantic import BaseModel
from typing import Optional

# Query parameters accepted by /x/{slug}
class LandingQuery(BaseModel):
    text: Optional[str] = None  # overrides the slug's base text
    twclid: Optional[str] = None  # X/Twitter ad click id
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    utm_content: Optional[str] = None
