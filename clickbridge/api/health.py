from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from clickbridge.core.config import Settings
from clickbridge.schemas.HealthResponse import HealthResponse
from clickbridge.services.context import BridgeContext, get_context
from clickbridge.services.security import NO_CACHE_HEADERS
from clickbridge.services.whatsapp import is_valid_phone_number

router = APIRouter(tags=["health"])


def validate_env_config(settings: Settings) -> List[str]:
    errors = []
    if not settings.WHATSAPP_NUMBER:
        errors.append("WHATSAPP_NUMBER is required")
    elif not is_valid_phone_number(settings.WHATSAPP_NUMBER):
        errors.append("WHATSAPP_NUMBER must be E.164 format digits (no +)")
    return errors


# degraded (503) rather than down when required config is missing
@router.get("/healthz", response_model=HealthResponse)
def health_check(context: BridgeContext = Depends(get_context)):
    warnings = validate_env_config(context.settings)
    health = HealthResponse(
        status="degraded" if warnings else "healthy",
        timestamp=datetime.now(timezone.utc),
        version=context.settings.VERSION,
        warnings=warnings or None,
    )
    return JSONResponse(
        status_code=503 if warnings else 200,
        content=health.model_dump(mode="json", exclude_none=True),
        headers=NO_CACHE_HEADERS,
    )
