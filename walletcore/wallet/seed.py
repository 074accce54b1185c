"""
Seed derivation: mnemonic text + passphrase -> 64-byte seed (BIP39)
"""
import unicodedata

from walletcore.core import WALLET
from walletcore.cryptography import pbkdf2_hmac_sha512

__all__ = ["mnemonic_to_seed"]


def mnemonic_to_seed(mnemonic: str, passphrase: str = "") -> bytes:
    """
    PBKDF2-HMAC-SHA512 with password = mnemonic, salt = "mnemonic" + passphrase, 2048 iterations, 64-byte output.
    Both strings are NFKD normalised and UTF-8 encoded first; ASCII input is unchanged by the normalisation.
    """
    normalized_mnemonic = unicodedata.normalize("NFKD", mnemonic)
    normalized_passphrase = unicodedata.normalize("NFKD", passphrase)

    password_bytes = normalized_mnemonic.encode("utf-8")
    salt = f"{WALLET.SEED_SALT}{normalized_passphrase}".encode("utf-8")

    return pbkdf2_hmac_sha512(password_bytes, salt, iterations=WALLET.SEED_ITERATIONS, dklen=WALLET.DKLEN)
