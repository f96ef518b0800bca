import pytest

from clickbridge.core.exceptions import InvalidPhoneNumberError
from clickbridge.services.whatsapp import (
    MAX_MESSAGE_LENGTH,
    build_message_with_cid,
    generate_wa_deep_link_url,
    generate_wa_https_url,
    generate_whatsapp_urls,
    is_valid_phone_number,
    sanitize_message_text,
)


@pytest.mark.parametrize("phone", ["14155552671", "919876543210", "1234567", "123456789012345"])
def test_valid_phone_numbers(phone):
    assert is_valid_phone_number(phone)


@pytest.mark.parametrize("phone", [
    "0123",
    "+14155552671",
    "014155552671",
    "123456",
    "1234567890123456",
    "1415-555-2671",
    "1٤١٥٥٥٥٢٦٧١",
    "",
    None,
])
def test_invalid_phone_numbers(phone):
    assert is_valid_phone_number(phone) is False


def test_sanitize_trims_and_strips_null_bytes():
    assert sanitize_message_text("  Hello\0 World  ") == "Hello World"


def test_sanitize_truncates():
    result = sanitize_message_text("a" * 2500)
    assert len(result) == MAX_MESSAGE_LENGTH


@pytest.mark.parametrize("text", [
    "Hi Tal",
    "   padded   ",
    "a \0",
    " \0 leading",
    "x" * 1999 + " y",
    "\0" * 10,
    "",
    "emoji \U0001F600 and\nnewlines\n",
])
def test_sanitize_is_idempotent(text):
    once = sanitize_message_text(text)
    assert sanitize_message_text(once) == once
    assert len(once) <= MAX_MESSAGE_LENGTH


def test_build_message_with_cid():
    assert build_message_with_cid("Hi Tal", "ABC123DEF0") == "Hi Tal (cid:ABC123DEF0)"


def test_build_message_with_cid_sanitizes_base_text():
    assert build_message_with_cid("  Hi Tal \0 ", "ABC123DEF0") == "Hi Tal (cid:ABC123DEF0)"


def test_build_message_with_cid_keeps_suffix_for_long_text():
    message = build_message_with_cid("a" * 3000, "ABC123DEF0")
    assert message.endswith(" (cid:ABC123DEF0)")
    assert len(message) <= MAX_MESSAGE_LENGTH


def test_https_url():
    assert generate_wa_https_url("14155552671", "Hi Tal") == "https://wa.me/14155552671?text=Hi%20Tal"


def test_deep_link_url():
    assert (
        generate_wa_deep_link_url("14155552671", "Hi Tal")
        == "whatsapp://send?phone=14155552671&text=Hi%20Tal"
    )


def test_url_encoding_matches_uri_component_rules():
    url = generate_wa_https_url("14155552671", "Hi (cid:ABC123DEF0) & more?")
    assert url == "https://wa.me/14155552671?text=Hi%20(cid%3AABC123DEF0)%20%26%20more%3F"


def test_url_encodes_unicode_as_utf8():
    url = generate_wa_https_url("14155552671", "café")
    assert url.endswith("?text=caf%C3%A9")


@pytest.mark.parametrize("builder", [generate_wa_https_url, generate_wa_deep_link_url])
def test_invalid_phone_raises(builder):
    with pytest.raises(InvalidPhoneNumberError) as exc_info:
        builder("+14155552671", "Hi")
    assert exc_info.value.phone == "+14155552671"
    assert isinstance(exc_info.value, ValueError)


def test_generate_whatsapp_urls_share_one_message():
    urls = generate_whatsapp_urls("14155552671", "Hi Tal", "ABC123DEF0")
    assert urls.message_text == "Hi Tal (cid:ABC123DEF0)"
    assert urls.https_url == "https://wa.me/14155552671?text=Hi%20Tal%20(cid%3AABC123DEF0)"
    assert urls.deep_link_url == "whatsapp://send?phone=14155552671&text=Hi%20Tal%20(cid%3AABC123DEF0)"
    assert urls.https_url.split("text=")[1] == urls.deep_link_url.split("text=")[1]


def test_preview_matches_link_text_for_empty_base():
    urls = generate_whatsapp_urls("14155552671", "\0\0", "ABC123DEF0")
    assert urls.message_text == "(cid:ABC123DEF0)"
    assert urls.https_url == "https://wa.me/14155552671?text=(cid%3AABC123DEF0)"


def test_generate_whatsapp_urls_invalid_phone():
    with pytest.raises(InvalidPhoneNumberError):
        generate_whatsapp_urls("0123", "Hi Tal", "ABC123DEF0")
