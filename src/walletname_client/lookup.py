"""Public wallet name resolution over DNS.

A wallet name publishes its currencies in a TXT record at ``_wallet.<name>``
(whitespace separated codes) and each address, base64 encoded, in a TXT
record at ``_<currency>._wallet.<name>``. No partner credentials are used.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, List, Optional

import dns.exception
import dns.name
import dns.resolver

from .api.base import CurrencyNotFoundError, TransportError, WalletNameNotFoundError
from .config import LookupConfig

logger = logging.getLogger(__name__)

_MISSING = (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer, dns.resolver.NoNameservers)
_INVALID_NAME = (dns.name.EmptyLabel, dns.name.LabelTooLong, dns.name.NameTooLong, dns.name.BadEscape)


def build_resolver(config: Optional[LookupConfig] = None) -> dns.resolver.Resolver:
    """Create a resolver using the system configuration plus any overrides."""
    config = config or LookupConfig()
    resolver = dns.resolver.Resolver(configure=not config.nameservers)
    if config.nameservers:
        resolver.nameservers = list(config.nameservers)
    resolver.lifetime = config.lifetime
    return resolver


def _txt_values(resolver: Any, qname: str) -> List[str]:
    answer = resolver.resolve(qname, "TXT")
    return [b"".join(rdata.strings).decode("utf-8", errors="replace") for rdata in answer]


def _decode_address(value: str) -> str:
    try:
        return base64.b64decode(value, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return value


def wallet_name_lookup(
    uri: str,
    currency: str,
    *,
    resolver: Optional[Any] = None,
    config: Optional[LookupConfig] = None,
) -> str:
    """Resolve ``uri`` to its ``currency`` address.

    Raises:
        WalletNameNotFoundError: If the name is not a valid DNS name or
            publishes no wallet records.
        CurrencyNotFoundError: If the name has no address for ``currency``.
        TransportError: If the resolver is unavailable, times out or fails.
    """

    name = uri.strip().rstrip(".")
    currency = currency.strip().lower()
    wallet_qname = f"_wallet.{name}"
    currency_qname = f"_{currency}._wallet.{name}"

    try:
        dns.name.from_text(wallet_qname)
    except _INVALID_NAME as exc:
        raise WalletNameNotFoundError(f"Wallet name {uri} is not a valid DNS name") from exc
    try:
        dns.name.from_text(currency_qname)
    except _INVALID_NAME as exc:
        raise CurrencyNotFoundError(f"Currency {currency} not found for wallet name {uri}") from exc

    if resolver is None:
        try:
            resolver = build_resolver(config)
        except dns.exception.DNSException as exc:
            raise TransportError(f"DNS resolver unavailable: {exc}") from exc

    try:
        listings = _txt_values(resolver, wallet_qname)
    except _MISSING + _INVALID_NAME as exc:
        raise WalletNameNotFoundError(f"Wallet name {uri} not found") from exc
    except dns.exception.DNSException as exc:
        raise TransportError(f"DNS lookup for {uri} failed: {exc}") from exc

    available = [code.lower() for value in listings for code in value.split()]
    logger.debug("Wallet name %s lists currencies %s", name, available)
    if currency not in available:
        raise CurrencyNotFoundError(f"Currency {currency} not found for wallet name {uri}")

    try:
        values = _txt_values(resolver, currency_qname)
    except _MISSING + _INVALID_NAME as exc:
        raise CurrencyNotFoundError(
            f"Currency {currency} not found for wallet name {uri}"
        ) from exc
    except dns.exception.DNSException as exc:
        raise TransportError(f"DNS lookup for {uri} failed: {exc}") from exc

    if not values or not values[0]:
        raise CurrencyNotFoundError(f"Currency {currency} not found for wallet name {uri}")
    return _decode_address(values[0])
