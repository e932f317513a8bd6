from datetime import timedelta

import pytest

from walletname_client.api.base import (
    MalformedPayloadError,
    WalletNameAPIError,
    parse_timestamp,
    url_encode,
)


def test_url_encode():
    assert url_encode("Test Partner 1") == "Test%20Partner%201"
    assert url_encode("TestPartner") == "TestPartner"


def test_url_encode_keeps_single_segment():
    encoded = url_encode("a/b?c&d=e#f")

    assert "/" not in encoded
    assert encoded == "a%2Fb%3Fc%26d%3De%23f"


def test_parse_timestamp_keeps_milliseconds():
    parsed = parse_timestamp("2015-06-13T02:35:12.543Z")

    assert (parsed.year, parsed.month, parsed.day) == (2015, 6, 13)
    assert (parsed.hour, parsed.minute, parsed.second) == (2, 35, 12)
    assert parsed.microsecond * 1000 == 543000000
    assert parsed.utcoffset() == timedelta(0)


def test_parse_timestamp_truncates_nanoseconds():
    parsed = parse_timestamp("2015-06-13T02:35:12.123456789+02:00")

    assert parsed.microsecond == 123456
    assert parsed.utcoffset() == timedelta(hours=2)


def test_parse_timestamp_empty_values():
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None


def test_parse_timestamp_rejects_garbage():
    with pytest.raises(MalformedPayloadError):
        parse_timestamp("next tuesday")


def test_api_error_rendering_distinguishes_missing_failures():
    assert str(WalletNameAPIError("M")) == "M"
    assert str(WalletNameAPIError("M", [])) == "M [FAILURES: ]"
    assert str(WalletNameAPIError("M", ["a", "b"])) == "M [FAILURES: a, b]"
