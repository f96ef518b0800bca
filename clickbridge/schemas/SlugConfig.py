from pydantic import BaseModel, Field
from typing import Optional

class SlugConfig(BaseModel):
    # JSON keys are camelCase ("baseText"), Python fields snake_case
    slug: str = Field(..., min_length=1)
    base_text: str = Field(..., alias="baseText", min_length=1)
    phone_override: Optional[str] = Field(None, alias="phoneOverride")
    default_utm_campaign: Optional[str] = Field(None, alias="defaultUtmCampaign")

    model_config = {"populate_by_name": True}
