from fastapi import APIRouter, Depends, Header, HTTPException, status
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from clickbridge.core.exceptions import PersistenceError
from clickbridge.schemas.ClickRecord import ClickRecord
from clickbridge.services.context import BridgeContext, get_context
from clickbridge.services.security import NO_CACHE_HEADERS, validate_admin_token
from clickbridge.utils.encoding import is_valid_cid

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["admin"])


@router.get("/click/{cid}", response_model=ClickRecord)
async def get_click_endpoint(
    cid: str,
    x_admin_token: Optional[str] = Header(None, alias="X-Admin-Token"),
    context: BridgeContext = Depends(get_context),
):
    """Look up the click recorded for a cid. Requires the X-Admin-Token header."""
    if not validate_admin_token(x_admin_token, context.settings.ADMIN_TOKEN):
        logger.warning("Admin lookup rejected: bad or missing token")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    # malformed cids never reach the store
    if not is_valid_cid(cid):
        logger.warning(f"Admin lookup rejected: invalid cid format {cid[:20]!r}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid cid format")

    try:
        click = await context.store.get_click_by_cid(cid)
    except PersistenceError as e:
        logger.error(f"Failed to fetch click {cid}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")

    if click is None:
        logger.warning(f"Admin lookup 404: cid not found: {cid}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Click not found")

    return JSONResponse(content=click.model_dump(mode="json"), headers=NO_CACHE_HEADERS)
