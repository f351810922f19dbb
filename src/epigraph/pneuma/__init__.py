"""
Pneuma - Transaction construction layer for Epigraph.

Provides ABI loading, chain metadata, calldata encoding and the
transport encoding of unsigned transactions handed to wallet clients.

Nothing here signs, broadcasts or reads chain state.
"""
