"""Registry resource records."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from .api.base import LocalValidationError, get_list, get_str

if TYPE_CHECKING:
    from .partner import PartnerClient

WALLET_NAME_URI = "/v1/partner/walletname"

logger = logging.getLogger(__name__)


def dump_body(payload: Mapping[str, Any]) -> str:
    """Serialise a request body with sorted keys and compact separators."""

    return json.dumps(payload, sort_keys=True, separators=(",", ":"))


@dataclass
class Wallet:
    """A single currency address held by a wallet name."""

    currency: str
    wallet_address: str

    def to_dict(self) -> Dict[str, str]:
        return {"currency": self.currency, "wallet_address": self.wallet_address}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Wallet":
        return cls(
            currency=get_str(payload, "currency"),
            wallet_address=get_str(payload, "wallet_address"),
        )


@dataclass
class Partner:
    """A partner account permitted to manage domains and wallet names."""

    id: str = ""
    name: str = ""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Partner":
        return cls(id=get_str(payload, "id"), name=get_str(payload, "name"))


@dataclass
class Domain:
    """A DNS domain delegated to the registry.

    Each read operation fills a different subset of fields: creation returns
    nameservers and status, the status query returns delegation details and
    the DNSSEC query returns key rollover details.
    """

    domain_name: str = ""
    nameservers: List[str] = field(default_factory=list)
    status: str = ""
    delegation_status: bool = False
    delegation_message: str = ""
    wallet_name_count: int = 0
    next_roll_date: Optional[datetime] = None
    ds_records: List[str] = field(default_factory=list)
    public_signing_key: str = ""


@dataclass
class WalletName:
    """A human readable name mapped to one or more currency addresses."""

    domain_name: str = ""
    name: str = ""
    external_id: str = ""
    wallets: List[Wallet] = field(default_factory=list)
    id: str = ""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "WalletName":
        return cls(
            id=get_str(payload, "id"),
            domain_name=get_str(payload, "domain_name"),
            name=get_str(payload, "name"),
            external_id=get_str(payload, "external_id"),
            wallets=[Wallet.from_dict(w) for w in get_list(payload, "wallets") if isinstance(w, Mapping)],
        )

    # -------- Currency helpers --------
    def get_address(self, currency: str) -> str:
        """Return the address for ``currency`` or ``""`` if none is set."""
        for wallet in self.wallets:
            if wallet.currency == currency:
                return wallet.wallet_address
        return ""

    def used_currencies(self) -> List[str]:
        return [wallet.currency for wallet in self.wallets]

    def set_currency_address(self, currency: str, address: str) -> None:
        """Update the first wallet for ``currency`` in place, or append one."""
        for wallet in self.wallets:
            if wallet.currency == currency:
                wallet.wallet_address = address
                return
        self.wallets.append(Wallet(currency=currency, wallet_address=address))

    def remove_currency(self, currency: str) -> None:
        self.wallets = [wallet for wallet in self.wallets if wallet.currency != currency]

    # -------- Persistence --------
    def to_dict(self) -> Dict[str, Any]:
        """Return the record as sent to the registry; ``id`` only once assigned."""
        record: Dict[str, Any] = {
            "domain_name": self.domain_name,
            "name": self.name,
            "external_id": self.external_id,
            "wallets": [wallet.to_dict() for wallet in self.wallets],
        }
        if self.id:
            record["id"] = self.id
        return record

    def save(self, client: "PartnerClient") -> None:
        """Create (POST) or update (PUT) this wallet name on the registry.

        The id returned by the registry replaces the in-memory id.
        """
        method = "PUT" if self.id else "POST"
        body = dump_body({"wallet_names": [self.to_dict()]})

        logger.info("Saving wallet name %s.%s (%s)", self.name, self.domain_name, method)
        response = client.process_request(WALLET_NAME_URI, method, body)

        records = get_list(response, "wallet_names")
        if records and isinstance(records[0], Mapping) and records[0].get("id"):
            self.id = str(records[0]["id"])

    def delete(self, client: "PartnerClient") -> None:
        """Delete this wallet name from the registry. Requires an id."""
        if not self.id:
            raise LocalValidationError("WalletName has no ID! Cannot Delete!")

        body = dump_body({"wallet_names": [{"domain_name": self.domain_name, "id": self.id}]})
        logger.info("Deleting wallet name %s (%s)", self.id, self.domain_name)
        client.process_request(WALLET_NAME_URI, "DELETE", body)
