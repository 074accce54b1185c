"""
Networks the signer can target. Only the chain id reaches the signature; it binds a transaction to one network.
"""
from enum import Enum

from walletcore.core import ValidationError

__all__ = ["Network"]


class Network(Enum):
    MAINNET = (1, "Mainnet")
    SEPOLIA = (11155111, "Sepolia")

    def __init__(self, chain_id: int, label: str):
        self.chain_id = chain_id
        self.label = label

    @classmethod
    def from_chain_id(cls, chain_id: int) -> "Network":
        for network in cls:
            if network.chain_id == chain_id:
                return network
        raise ValidationError(f"Unknown chain id {chain_id}")
