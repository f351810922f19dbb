"""
Transaction request builder.

Turns the validated `message` parameter into a serialized, chain-targeted
transaction: a storeMessage(message, timestamp) call on the configured
contract, or a plain value transfer when the action is configured for it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .errors import MissingParameterError, SerializationError
from .pneuma.abi import load_abi
from .pneuma.serialize import serialize_transaction
from .pneuma.tx import build_call, build_transfer
from .settings import Settings
from .utils import unix_now, utf16_code_units

logger = logging.getLogger(__name__)

STORE_FUNCTION = "storeMessage"
OFFSET_WINDOW = 3600


@dataclass(frozen=True)
class ExecutionResponse:
    serialized_transaction: str
    chain_id: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "serializedTransaction": self.serialized_transaction,
            "chainId": self.chain_id,
        }


def message_offset(message: str) -> int:
    """Position-weighted sum of the message's character codes, modulo one hour.

    Character codes are UTF-16 code units and positions are 1-based.
    """
    total = sum(code * position for position, code in enumerate(utf16_code_units(message), start=1))
    return total % OFFSET_WINDOW


def optimized_timestamp(message: str, now: int) -> int:
    return now + message_offset(message)


def message_timestamp(message: str, now: Optional[int] = None, optimized: bool = True) -> int:
    """Unix-seconds timestamp stored alongside the message."""
    if now is None:
        now = unix_now()
    if optimized:
        return optimized_timestamp(message, now)
    return now


def build_and_serialize(
    message: Optional[str],
    settings: Settings,
    now: Optional[int] = None,
    abi: Optional[list[dict[str, Any]]] = None,
) -> ExecutionResponse:
    """
    Build the transaction for a message and serialize it.

    Args:
        message: The `message` parameter; required and non-empty
        settings: Contract, chain and policy configuration
        now: Current Unix time in seconds (default: wall clock)
        abi: Contract ABI (default: loaded from settings.contract_name)

    Returns:
        ExecutionResponse carrying the serialized transaction

    Raises:
        MissingParameterError: If message is missing or empty
        SerializationError: If the transaction cannot be built or encoded
    """
    if not message:
        raise MissingParameterError()

    chain = settings.target_chain

    if settings.transaction_mode == "transfer":
        spec = build_transfer(settings.recipient_address, settings.transfer_value, chain.id)
    else:
        if abi is None:
            try:
                abi = load_abi(settings.contract_name, settings.abi_dir)
            except (OSError, ValueError, KeyError) as exc:
                raise SerializationError(f"Cannot load ABI for {settings.contract_name}: {exc}") from exc
        timestamp = message_timestamp(message, now, optimized=settings.use_optimized_timestamp)
        spec = build_call(settings.contract_address, abi, STORE_FUNCTION, [message, timestamp])

    serialized = serialize_transaction(spec, chain.id)
    logger.debug(
        "Built %s transaction for chain %s (%d bytes encoded)",
        settings.transaction_mode,
        chain.key,
        len(serialized),
    )

    return ExecutionResponse(
        serialized_transaction=serialized,
        chain_id=settings.chain_identifier(),
    )
