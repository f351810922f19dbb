"""
Process-wide configuration.

Loaded once at startup from the environment (optionally seeded from a
.env file) and passed explicitly to the builders and the HTTP app.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .pneuma.chains import DEFAULT_CHAIN, Chain, get_chain
from .pneuma.tx import to_checksum_address
from .utils import is_absolute_http_url

DEFAULT_CONTRACT_ADDRESS = "0x5ee75a1B1648C023e885E58bD3735Ae273f2cc52"
DEFAULT_CONTRACT_NAME = "MessageStore"
DEFAULT_RECIPIENT_ADDRESS = "0x5ee75a1B1648C023e885E58bD3735Ae273f2cc52"
DEFAULT_TRANSFER_VALUE = 1_000_000
DEFAULT_ICON_URL = "https://avatars.githubusercontent.com/u/117962315"

CHAIN_ID_FORMATS = ("name", "numeric")
TRANSACTION_MODES = ("call", "transfer")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _env_choice(name: str, default: str, choices: tuple[str, ...]) -> str:
    value = os.environ.get(name, "").strip().lower() or default
    if value not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}, got {value!r}")
    return value


@dataclass(frozen=True)
class Settings:
    """
    Static configuration for the action.

    Attributes:
        base_url: Public base URL override; None derives it per request
        contract_address: Checksummed address of the message store contract
        contract_name: ABI artifact name for the contract
        abi_dir: Directory holding ABI artifacts (None: bundled artifacts)
        chain: Chain key advertised as the action's source chain
        use_optimized_timestamp: Add the message-derived offset to the timestamp
        chain_id_format: "name" or "numeric" form of ExecutionResponse.chainId
        transaction_mode: "call" (storeMessage) or "transfer" (plain value transfer)
        recipient_address: Recipient for transfer mode
        transfer_value: Value in wei for transfer mode
        icon_url: Icon advertised in the action descriptor
        log_level: Root log level used by the server
    """
    base_url: Optional[str] = None
    contract_address: str = DEFAULT_CONTRACT_ADDRESS
    contract_name: str = DEFAULT_CONTRACT_NAME
    abi_dir: Optional[Path] = None
    chain: str = DEFAULT_CHAIN
    use_optimized_timestamp: bool = True
    chain_id_format: str = "name"
    transaction_mode: str = "call"
    recipient_address: str = DEFAULT_RECIPIENT_ADDRESS
    transfer_value: int = DEFAULT_TRANSFER_VALUE
    icon_url: str = DEFAULT_ICON_URL
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.base_url is not None and not is_absolute_http_url(self.base_url):
            raise ValueError(f"base_url must be an absolute http(s) URL, got {self.base_url!r}")
        if self.chain_id_format not in CHAIN_ID_FORMATS:
            raise ValueError(f"chain_id_format must be one of {CHAIN_ID_FORMATS}")
        if self.transaction_mode not in TRANSACTION_MODES:
            raise ValueError(f"transaction_mode must be one of {TRANSACTION_MODES}")
        if self.transfer_value < 0:
            raise ValueError("transfer_value must not be negative")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}")
        object.__setattr__(self, "chain", get_chain(self.chain).key)
        # Normalise addresses once so every request sees the checksummed form
        object.__setattr__(self, "contract_address", to_checksum_address(self.contract_address))
        object.__setattr__(self, "recipient_address", to_checksum_address(self.recipient_address))

    @property
    def target_chain(self) -> Chain:
        return get_chain(self.chain)

    def chain_identifier(self) -> str:
        """The chainId string reported to clients, per ``chain_id_format``."""
        chain = self.target_chain
        if self.chain_id_format == "numeric":
            return str(chain.id)
        return chain.name

    def with_overrides(self, **changes) -> "Settings":
        return replace(self, **changes)

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "Settings":
        """
        Build settings from EPIGRAPH_* environment variables.

        Args:
            env_path: Optional .env file loaded before reading the environment

        Raises:
            ValueError: If any variable holds an invalid value
        """
        if env_path is not None and env_path.exists():
            load_dotenv(env_path, override=True)

        abi_dir = os.environ.get("EPIGRAPH_ABI_DIR", "").strip()
        transfer_value = os.environ.get("EPIGRAPH_TRANSFER_VALUE", "").strip()
        try:
            value = int(transfer_value) if transfer_value else DEFAULT_TRANSFER_VALUE
        except ValueError:
            raise ValueError(
                f"EPIGRAPH_TRANSFER_VALUE must be an integer, got {transfer_value!r}"
            ) from None

        return cls(
            base_url=os.environ.get("EPIGRAPH_API_URL", "").strip() or None,
            contract_address=os.environ.get("EPIGRAPH_CONTRACT_ADDRESS", "").strip() or DEFAULT_CONTRACT_ADDRESS,
            contract_name=os.environ.get("EPIGRAPH_CONTRACT_NAME", "").strip() or DEFAULT_CONTRACT_NAME,
            abi_dir=Path(abi_dir).expanduser() if abi_dir else None,
            chain=(os.environ.get("EPIGRAPH_CHAIN", "").strip() or DEFAULT_CHAIN).lower(),
            use_optimized_timestamp=_env_bool("EPIGRAPH_OPTIMIZED_TIMESTAMP", True),
            chain_id_format=_env_choice("EPIGRAPH_CHAIN_ID_FORMAT", "name", CHAIN_ID_FORMATS),
            transaction_mode=_env_choice("EPIGRAPH_TX_MODE", "call", TRANSACTION_MODES),
            recipient_address=os.environ.get("EPIGRAPH_RECIPIENT_ADDRESS", "").strip() or DEFAULT_RECIPIENT_ADDRESS,
            transfer_value=value,
            icon_url=os.environ.get("EPIGRAPH_ICON_URL", "").strip() or DEFAULT_ICON_URL,
            log_level=(os.environ.get("EPIGRAPH_LOG_LEVEL", "").strip() or "INFO").upper(),
        )
