"""Configuration helpers for the wallet name partner client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
import os

from dotenv import load_dotenv

DEFAULT_API_URL = "https://api.netki.com"


@dataclass(frozen=True)
class PartnerCredentials:
    """Partner API authentication bundle."""

    partner_id: str
    api_key: str


@dataclass(frozen=True)
class ApiConfig:
    """Registry API endpoint and transport settings."""

    base_url: str = DEFAULT_API_URL
    request_timeout: float = 10.0


@dataclass(frozen=True)
class LookupConfig:
    """DNS resolver settings for public wallet name lookups."""

    nameservers: Tuple[str, ...] = ()
    lifetime: float = 5.0


@dataclass(frozen=True)
class Settings:
    """Aggregate project configuration loaded from environment variables."""

    credentials: PartnerCredentials
    api: ApiConfig
    lookup: LookupConfig

    @classmethod
    def from_env(cls, *, load_env_file: bool = True) -> "Settings":
        """Instantiate settings from environment variables.

        Args:
            load_env_file: If ``True`` (default) a `.env` file located in the
                project root will be loaded before accessing the environment.

        Raises:
            ValueError: If any required configuration item is missing.
        """

        if load_env_file:
            load_dotenv()

        credentials = PartnerCredentials(
            partner_id=_require_env("WALLETNAME_PARTNER_ID"),
            api_key=_require_env("WALLETNAME_API_KEY"),
        )
        api = ApiConfig(
            base_url=os.getenv("WALLETNAME_API_URL", DEFAULT_API_URL),
            request_timeout=_float_env("WALLETNAME_TIMEOUT", "10"),
        )
        lookup = LookupConfig(
            nameservers=_split_csv(os.getenv("WALLETNAME_DNS_NAMESERVERS", "")),
            lifetime=_float_env("WALLETNAME_DNS_LIFETIME", "5"),
        )

        return cls(credentials=credentials, api=api, lookup=lookup)


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        raise ValueError(f"Missing required environment variable: {name}")
    return value


def _float_env(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid numeric value for {name}: {raw!r}") from exc


def _split_csv(raw: str) -> Tuple[str, ...]:
    return tuple(segment.strip() for segment in raw.split(",") if segment.strip())
