"""
The Wallet class - ties together Mnemonic, seed derivation and ExtendedKey for HD wallet functionality
"""
from typing import Optional, Sequence

from walletcore.core import WALLET, TX, get_logger
from walletcore.wallet.address import address_from_private_key
from walletcore.wallet.derivation import DerivationPath
from walletcore.wallet.entropy import EntropySource
from walletcore.wallet.mnemonic import Mnemonic
from walletcore.wallet.network import Network
from walletcore.wallet.seed import mnemonic_to_seed
from walletcore.wallet.transaction import Transaction, SignedTransaction
from walletcore.wallet.xkeys import ExtendedKey

__all__ = ["Wallet"]

logger = get_logger(__name__)


class Wallet:
    """
    Hierarchical Deterministic Wallet implementing BIP39/BIP32/BIP44 for Ethereum accounts
    """
    __slots__ = ('mnemonic', 'master_key')

    def __init__(
            self,
            phrase: str | Sequence[str] | None = None,
            passphrase: str = "",
            entropy_bits: int = WALLET.DEFAULT_ENTROPY_BITS,
            wordlist: Optional[Sequence[str]] = None,
            entropy_source: Optional[EntropySource] = None,
    ):
        """
        Initialize a wallet from a mnemonic phrase or generate a new one

        Args:
            phrase: Optional mnemonic phrase. If None, generates a random phrase
            passphrase: Optional BIP39 passphrase for seed derivation (default: "")
            entropy_bits: Entropy bit length for random mnemonic generation (default: 128 = 12 words)
            wordlist: Dictionary to use instead of the English wordlist
            entropy_source: Randomness source for new phrases
        """
        self.mnemonic = Mnemonic(phrase=phrase, entropy_bits=entropy_bits, wordlist=wordlist,
                                 entropy_source=entropy_source)

        # The seed is not kept
        self.master_key = ExtendedKey.from_master_seed(mnemonic_to_seed(self.mnemonic.phrase, passphrase))

    @classmethod
    def from_seed(cls, seed: bytes) -> "Wallet":
        """
        Create a wallet directly from a seed (bypasses mnemonic)
        """
        wallet = cls.__new__(cls)
        wallet.mnemonic = None
        wallet.master_key = ExtendedKey.from_master_seed(seed)
        return wallet

    def derive(self, path: str) -> ExtendedKey:
        """
        Derive a key at the given path, e.g. "m/44'/60'/0'/0/0"
        """
        return self.master_key.derive_path(path)

    def account(self, index: int = 0, scheme: DerivationPath = DerivationPath.ETHEREUM,
                account: int = 0) -> ExtendedKey:
        return self.derive(scheme.path(index=index, account=account))

    def address(self, index: int = 0, scheme: DerivationPath = DerivationPath.ETHEREUM, account: int = 0) -> str:
        """
        Checksummed address of the account at the given index
        """
        return address_from_private_key(self.account(index, scheme, account).private_key)

    def sign_transfer(self, to: str, value: int, nonce: int, gas_price: int, gas_limit: int = TX.DEFAULT_GAS_LIMIT,
                      network: Network = Network.SEPOLIA, index: int = 0,
                      scheme: DerivationPath = DerivationPath.ETHEREUM, account: int = 0) -> SignedTransaction:
        """
        Sign a value transfer from the account at the given index
        """
        tx = Transaction.build(to, value=value, nonce=nonce, gas_price=gas_price, gas_limit=gas_limit,
                               chain_id=network.chain_id)
        signed = tx.sign(self.account(index, scheme, account).private_key)
        logger.info("Signed transfer from account %d index %d on %s, nonce %d", account, index, network.label, nonce)
        return signed

    def to_dict(self) -> dict:
        """
        Public wallet information. The mnemonic and keys are not included
        """
        return {
            "words": len(self.mnemonic.words) if self.mnemonic else None,
            "first_address": self.address(0),
        }
