from typing import NamedTuple, Optional
import logging

from clickbridge.core.config import Settings
from clickbridge.db.repository import ClickStore, create_click_record
from clickbridge.schemas.ClickRecord import ClickRecord
from clickbridge.schemas.LandingQuery import LandingQuery
from clickbridge.services.security import hash_ip
from clickbridge.services.slug_config import SlugConfigMap, get_slug_config
from clickbridge.services.whatsapp import WhatsAppUrls, generate_whatsapp_urls, sanitize_message_text
from clickbridge.utils.encoding import generate_cid

logger = logging.getLogger(__name__)


class LandingVisit(NamedTuple):
    slug: str
    phone_number: str
    urls: WhatsAppUrls
    record: ClickRecord

    @property
    def cid(self) -> str:
        return self.record.cid


class LandingService:

    @staticmethod
    def build_visit(
        slug: str,
        query: LandingQuery,
        settings: Settings,
        slug_configs: SlugConfigMap,
        client_ip: str = "unknown",
        user_agent: Optional[str] = None,
        referer: Optional[str] = None,
    ) -> LandingVisit:
        """Mint a cid for one landing visit and compose everything derived from it.

        Raises InvalidPhoneNumberError when the resolved number is malformed.
        Nothing is persisted here, see ``record_click``.
        """
        slug_config = get_slug_config(slug, slug_configs)
        cid = generate_cid()

        # a text that sanitizes to nothing (blank, null bytes) keeps the slug text
        base_text = query.text if query.text and sanitize_message_text(query.text) else slug_config.base_text
        phone_number = slug_config.phone_override or settings.WHATSAPP_NUMBER
        urls = generate_whatsapp_urls(phone_number, base_text, cid)

        record = create_click_record(
            cid,
            slug,
            twclid=query.twclid,
            utm_source=query.utm_source,
            utm_medium=query.utm_medium,
            utm_campaign=query.utm_campaign or slug_config.default_utm_campaign,
            utm_content=query.utm_content,
            user_agent=user_agent,
            referer=referer,
            ip_hash=hash_ip(client_ip, settings.IP_HASH_SALT),
        )
        return LandingVisit(slug=slug, phone_number=phone_number, urls=urls, record=record)

    @staticmethod
    async def record_click(store: ClickStore, record: ClickRecord) -> bool:
        """Best-effort write of a visit's click record.

        Runs as a background task after the page is sent. Failures are logged
        and swallowed: losing attribution is preferred to losing the page.
        """
        try:
            await store.insert_click(record)
        except Exception:
            logger.exception("record_click: failed to store click cid=%s slug=%s", record.cid, record.slug)
            return False
        logger.info("record_click: stored click cid=%s slug=%s", record.cid, record.slug)
        return True
