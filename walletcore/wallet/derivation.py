"""
The DerivationPath class for use in the Wallet
"""
from enum import Enum

__all__ = ["DerivationPath"]


class DerivationPath(Enum):
    ETHEREUM = ("m/44'/60'/{account}'/0/{index}", "BIP44 Ethereum")
    LEDGER_LIVE = ("m/44'/60'/{index}'/0/0", "Ledger Live")
    LEDGER_LEGACY = ("m/44'/60'/0'/{index}", "Ledger legacy (MEW)")

    def __init__(self, template: str, label: str):
        self.template = template
        self.label = label

    def path(self, index: int = 0, account: int = 0) -> str:
        # Coin type hardcoded to 60' (ETH)
        return self.template.format(account=account, index=index)
