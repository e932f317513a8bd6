import base64
from types import SimpleNamespace
from unittest.mock import MagicMock

import dns.exception
import dns.resolver
import pytest

from walletname_client.api.base import (
    CurrencyNotFoundError,
    TransportError,
    WalletNameNotFoundError,
)
from walletname_client.config import LookupConfig
from walletname_client.lookup import build_resolver, wallet_name_lookup


def _txt(*values):
    return [SimpleNamespace(strings=(value.encode(),)) for value in values]


def _resolver(records):
    resolver = MagicMock()

    def resolve(qname, rdtype):
        assert rdtype == "TXT"
        if qname not in records:
            raise dns.resolver.NXDOMAIN()
        return _txt(*records[qname])

    resolver.resolve.side_effect = resolve
    return resolver


ADDRESS = "1CpLXM15vjULK3ZPGUTDMUcGATGR9xGitv"
RECORDS = {
    "_wallet.wallet.example.com": ["btc ltc"],
    "_btc._wallet.wallet.example.com": [base64.b64encode(ADDRESS.encode()).decode()],
}


def test_lookup_returns_decoded_address():
    resolver = _resolver(RECORDS)

    assert wallet_name_lookup("wallet.example.com", "btc", resolver=resolver) == ADDRESS


def test_lookup_matches_currency_case_insensitively():
    resolver = _resolver(RECORDS)

    assert wallet_name_lookup("wallet.example.com.", "BTC", resolver=resolver) == ADDRESS


def test_lookup_bad_name():
    with pytest.raises(WalletNameNotFoundError):
        wallet_name_lookup("badbad", "btc", resolver=_resolver(RECORDS))


def test_lookup_bad_currency():
    with pytest.raises(CurrencyNotFoundError):
        wallet_name_lookup("wallet.example.com", "badbad", resolver=_resolver(RECORDS))


def test_lookup_listed_currency_without_record():
    with pytest.raises(CurrencyNotFoundError):
        wallet_name_lookup("wallet.example.com", "ltc", resolver=_resolver(RECORDS))


def test_lookup_timeout_is_transport_error():
    resolver = MagicMock()
    resolver.resolve.side_effect = dns.exception.Timeout()

    with pytest.raises(TransportError):
        wallet_name_lookup("wallet.example.com", "btc", resolver=resolver)


def test_build_resolver_applies_config():
    resolver = build_resolver(LookupConfig(nameservers=("8.8.8.8",), lifetime=2.0))

    assert len(resolver.nameservers) == 1
    assert resolver.lifetime == 2.0


@pytest.mark.parametrize("uri", ["bad..name", "a" * 64 + ".example.com"])
def test_lookup_invalid_name_is_not_found(uri):
    resolver = _resolver(RECORDS)

    with pytest.raises(WalletNameNotFoundError):
        wallet_name_lookup(uri, "btc", resolver=resolver)

    resolver.resolve.assert_not_called()


def test_lookup_other_dns_failure_is_transport_error():
    resolver = MagicMock()
    resolver.resolve.side_effect = dns.exception.DNSException("server failure")

    with pytest.raises(TransportError) as excinfo:
        wallet_name_lookup("wallet.example.com", "btc", resolver=resolver)

    assert isinstance(excinfo.value.__cause__, dns.exception.DNSException)


def test_lookup_without_resolver_configuration_is_transport_error(monkeypatch):
    def no_configuration(config=None):
        raise dns.resolver.NoResolverConfiguration("no nameservers")

    monkeypatch.setattr("walletname_client.lookup.build_resolver", no_configuration)

    with pytest.raises(TransportError):
        wallet_name_lookup("wallet.example.com", "btc")
