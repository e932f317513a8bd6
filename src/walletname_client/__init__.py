"""Wallet name registry partner client."""

from .api.base import (
    CurrencyNotFoundError,
    InvalidContentTypeError,
    LocalValidationError,
    MalformedPayloadError,
    TransportError,
    WalletNameAPIError,
    WalletNameClientError,
    WalletNameLookupError,
    WalletNameNotFoundError,
)
from .api.requester import Requester, interpret_response
from .config import ApiConfig, LookupConfig, PartnerCredentials, Settings
from .lookup import wallet_name_lookup
from .models import Domain, Partner, Wallet, WalletName
from .partner import PartnerClient

__all__ = [
    "Settings",
    "PartnerCredentials",
    "ApiConfig",
    "LookupConfig",
    "Requester",
    "interpret_response",
    "PartnerClient",
    "Partner",
    "Domain",
    "Wallet",
    "WalletName",
    "wallet_name_lookup",
    "WalletNameClientError",
    "TransportError",
    "InvalidContentTypeError",
    "MalformedPayloadError",
    "WalletNameAPIError",
    "LocalValidationError",
    "WalletNameLookupError",
    "WalletNameNotFoundError",
    "CurrencyNotFoundError",
]
