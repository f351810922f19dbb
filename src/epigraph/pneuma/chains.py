"""
Chain registry.

Static metadata for the chains an action can target. The key is what the
action descriptor advertises as its source chain; the id is the EIP-155
chain id; the name is the human-readable chain name.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Chain:
    key: str
    id: int
    name: str


CHAINS: dict[str, Chain] = {
    chain.key: chain
    for chain in (
        Chain(key="fuji", id=43113, name="Avalanche Fuji"),
        Chain(key="avalanche", id=43114, name="Avalanche"),
        Chain(key="ethereum", id=1, name="Ethereum"),
        Chain(key="sepolia", id=11155111, name="Sepolia"),
        Chain(key="base-sepolia", id=84532, name="Base Sepolia"),
    )
}

DEFAULT_CHAIN = "fuji"


def get_chain(key: str) -> Chain:
    """Look up a chain by key.

    Raises:
        ValueError: If the chain is not registered
    """
    try:
        return CHAINS[key.strip().lower()]
    except KeyError:
        known = ", ".join(sorted(CHAINS))
        raise ValueError(f"Unknown chain '{key}'. Known chains: {known}") from None


def chain_by_id(chain_id: int) -> Chain:
    for chain in CHAINS.values():
        if chain.id == chain_id:
            return chain
    raise ValueError(f"Unknown chain id {chain_id}")
