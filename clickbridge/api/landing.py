from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from typing import Optional
import logging

from clickbridge.core.exceptions import InvalidPhoneNumberError
from clickbridge.schemas.LandingQuery import LandingQuery
from clickbridge.services.context import BridgeContext, get_context
from clickbridge.services.landing import LandingService
from clickbridge.services.landing_page import INFO_PAGE, render_landing_page
from clickbridge.services.security import NO_CACHE_HEADERS, extract_client_ip

logger = logging.getLogger(__name__)

router = APIRouter(tags=["landing"])


@router.get("/", response_class=HTMLResponse)
def info_page_endpoint():
    return HTMLResponse(INFO_PAGE)


@router.get("/x/{slug}", response_class=HTMLResponse)
def landing_page_endpoint(
    slug: str,
    request: Request,
    background_tasks: BackgroundTasks,
    text: Optional[str] = None,
    twclid: Optional[str] = None,
    utm_source: Optional[str] = None,
    utm_medium: Optional[str] = None,
    utm_campaign: Optional[str] = None,
    utm_content: Optional[str] = None,
    context: BridgeContext = Depends(get_context),
):
    """
    Landing page for an ad click: mints a cid, shows the WhatsApp links and
    records the click in the background.
    """
    settings = context.settings
    if not settings.WHATSAPP_NUMBER:
        logger.error("Landing request for slug=%s but WHATSAPP_NUMBER is not set", slug)
        return PlainTextResponse(
            "Server configuration error: WHATSAPP_NUMBER not set",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    query = LandingQuery(
        text=text,
        twclid=twclid,
        utm_source=utm_source,
        utm_medium=utm_medium,
        utm_campaign=utm_campaign,
        utm_content=utm_content,
    )
    try:
        visit = LandingService.build_visit(
            slug,
            query,
            settings,
            context.slug_configs,
            client_ip=extract_client_ip(request),
            user_agent=request.headers.get("user-agent"),
            referer=request.headers.get("referer"),
        )
    except InvalidPhoneNumberError as e:
        logger.error(f"Landing page for slug={slug} has an invalid phone number: {e.phone}")
        return PlainTextResponse(
            "Server configuration error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    # Attribution is best-effort and must never hold up the page
    background_tasks.add_task(LandingService.record_click, context.store, visit.record)

    logger.info(f"Landing visit slug={slug} cid={visit.cid} twclid={'yes' if query.twclid else 'no'}")
    return HTMLResponse(render_landing_page(visit), headers=NO_CACHE_HEADERS)
