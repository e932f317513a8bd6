"""Partner, domain and wallet name operations against the registry."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from .api.base import get_list, get_str, parse_timestamp, to_bool, url_encode
from .api.requester import Requester
from .config import PartnerCredentials, Settings
from .models import WALLET_NAME_URI, Domain, Partner, Wallet, WalletName, dump_body

logger = logging.getLogger(__name__)


class PartnerClient:
    """Registry operations performed on behalf of one partner account."""

    def __init__(self, credentials: PartnerCredentials, requester: Requester) -> None:
        self._credentials = credentials
        self._requester = requester

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        session: Optional[requests.Session] = None,
    ) -> "PartnerClient":
        return cls(settings.credentials, Requester(settings.api, session=session))

    def process_request(self, uri: str, method: str, body_data: str = "") -> Dict[str, Any]:
        """Dispatch one request with this partner's credentials."""
        return self._requester.process_request(self._credentials, uri, method, body_data)

    # -------- Partners --------
    def create_partner(self, partner_name: str) -> Partner:
        logger.info("Creating partner %s", partner_name)
        response = self.process_request(f"/v1/admin/partner/{url_encode(partner_name)}", "POST")
        partner = response.get("partner")
        return Partner.from_dict(partner if isinstance(partner, dict) else {})

    def get_partners(self) -> List[Partner]:
        response = self.process_request("/v1/admin/partner", "GET")
        return [Partner.from_dict(p) for p in get_list(response, "partners") if isinstance(p, dict)]

    def delete_partner(self, partner: Partner) -> None:
        logger.info("Deleting partner %s", partner.name)
        self.process_request(f"/v1/admin/partner/{url_encode(partner.name)}", "DELETE")

    # -------- Domains --------
    def create_domain(self, domain_name: str, partner: Optional[Partner] = None) -> Domain:
        """Register ``domain_name``, optionally on behalf of a sub-partner."""
        body: Dict[str, str] = {}
        if partner is not None and partner.id:
            body["partner_id"] = partner.id

        logger.info("Creating domain %s", domain_name)
        response = self.process_request(
            f"/v1/partner/domain/{url_encode(domain_name)}", "POST", dump_body(body)
        )
        return Domain(
            domain_name=get_str(response, "domain_name"),
            status=get_str(response, "status"),
            nameservers=[str(ns) for ns in get_list(response, "nameservers")],
        )

    def get_domains(self) -> List[Domain]:
        response = self.process_request("/api/domain", "GET")
        return [
            Domain(domain_name=get_str(d, "domain_name"))
            for d in get_list(response, "domains")
            if isinstance(d, dict)
        ]

    def get_domain_status(self, domain: Domain) -> Domain:
        """Return delegation status and wallet name count for ``domain``."""
        response = self.process_request(
            f"/v1/partner/domain/{url_encode(domain.domain_name)}", "GET"
        )
        return Domain(
            domain_name=domain.domain_name,
            status=get_str(response, "status"),
            delegation_status=to_bool(response.get("delegation_status")),
            delegation_message=get_str(response, "delegation_message"),
            wallet_name_count=_to_int(response.get("wallet_name_count")),
        )

    def get_domain_dnssec(self, domain: Domain) -> Domain:
        """Return DNSSEC key rollover details for ``domain``."""
        response = self.process_request(
            f"/v1/partner/domain/dnssec/{url_encode(domain.domain_name)}", "GET"
        )
        return Domain(
            domain_name=domain.domain_name,
            next_roll_date=parse_timestamp(response.get("nextroll_date")),
            ds_records=[str(r) for r in get_list(response, "ds_records")],
            public_signing_key=get_str(response, "public_key_signing_key"),
        )

    def delete_domain(self, domain: Domain) -> None:
        logger.info("Deleting domain %s", domain.domain_name)
        self.process_request(f"/v1/partner/domain/{url_encode(domain.domain_name)}", "DELETE")

    # -------- Wallet names --------
    def create_wallet_name(
        self,
        domain: Domain,
        name: str,
        wallets: Iterable[Wallet] = (),
        external_id: str = "",
    ) -> WalletName:
        """Build an unsaved wallet name; call :meth:`WalletName.save` to persist it."""
        return WalletName(
            domain_name=domain.domain_name,
            name=name,
            external_id=external_id,
            wallets=list(wallets),
        )

    def get_wallet_names(
        self,
        domain: Optional[Domain] = None,
        external_id: str = "",
    ) -> List[WalletName]:
        """List wallet names, filtered by domain and/or external id when given."""
        params: List[str] = []
        if domain is not None and domain.domain_name:
            params.append(f"domain_name={url_encode(domain.domain_name)}")
        if external_id:
            params.append(f"external_id={url_encode(external_id)}")

        uri = WALLET_NAME_URI
        if params:
            uri = f"{uri}?{'&'.join(params)}"

        response = self.process_request(uri, "GET")
        if "wallet_name_count" in response and _to_int(response["wallet_name_count"]) == 0:
            return []
        return [
            WalletName.from_dict(record)
            for record in get_list(response, "wallet_names")
            if isinstance(record, dict)
        ]


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
