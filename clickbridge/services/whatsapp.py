"""WhatsApp message and link composition.

Two link forms are produced from the same message text: the universal
``https://wa.me`` link and the ``whatsapp://send`` deep link, which opens the
app directly but is not handled by every browser.
"""
import re
from typing import NamedTuple
from urllib.parse import quote

from clickbridge.core.exceptions import InvalidPhoneNumberError

# WhatsApp accepts far longer messages; this caps abuse through ?text=
MAX_MESSAGE_LENGTH = 2000

# E.164 digits without the "+": no leading zero, 7 to 15 ASCII digits
PHONE_REGEX = re.compile(r"^[1-9][0-9]{6,14}$")

# Characters left unescaped, matching JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


class WhatsAppUrls(NamedTuple):
    message_text: str
    https_url: str
    deep_link_url: str


def is_valid_phone_number(phone) -> bool:
    if not isinstance(phone, str):
        return False
    return PHONE_REGEX.fullmatch(phone) is not None


def sanitize_message_text(text: str) -> str:
    """Trim, drop null bytes and cap the length at MAX_MESSAGE_LENGTH.

    Whitespace uncovered by the null byte removal or the cut is trimmed as
    well, so sanitizing twice gives the same result as sanitizing once.
    """
    cleaned = text.strip().replace("\0", "")[:MAX_MESSAGE_LENGTH]
    return cleaned.strip()


def build_message_with_cid(base_text: str, cid: str) -> str:
    """Format: ``"<base text> (cid:ABC123DEF0)"``.

    A base text near the length cap is shortened so the suffix still fits
    once the URL builders sanitize the whole message.
    """
    suffix = f" (cid:{cid})"
    text = sanitize_message_text(base_text)
    if len(text) + len(suffix) > MAX_MESSAGE_LENGTH:
        text = text[:MAX_MESSAGE_LENGTH - len(suffix)].rstrip()
    return f"{text}{suffix}"


def _encode_text(text: str) -> str:
    return quote(sanitize_message_text(text), safe=_URI_COMPONENT_SAFE)


def _check_phone(phone: str) -> None:
    if not is_valid_phone_number(phone):
        raise InvalidPhoneNumberError(phone)


def generate_wa_https_url(phone: str, text: str) -> str:
    _check_phone(phone)
    return f"https://wa.me/{phone}?text={_encode_text(text)}"


def generate_wa_deep_link_url(phone: str, text: str) -> str:
    _check_phone(phone)
    return f"whatsapp://send?phone={phone}&text={_encode_text(text)}"


def generate_whatsapp_urls(phone: str, base_text: str, cid: str) -> WhatsAppUrls:
    # the preview shows exactly the text both links carry
    message_text = sanitize_message_text(build_message_with_cid(base_text, cid))
    return WhatsAppUrls(
        message_text=message_text,
        https_url=generate_wa_https_url(phone, message_text),
        deep_link_url=generate_wa_deep_link_url(phone, message_text),
    )
