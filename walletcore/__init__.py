"""
walletcore: entropy -> mnemonic -> seed -> key tree -> address -> signed Ethereum transaction
"""
from walletcore.core import ValidationError, CryptoError, InvalidChildKeyError, EncodingError
from walletcore.wallet import (
    EntropySource, generate_entropy, Mnemonic, entropy_to_mnemonic, mnemonic_to_entropy, validate_mnemonic,
    mnemonic_to_seed, ExtendedKey, master_key, derive_child, derive_path, parse_path, private_to_public_key,
    private_to_compressed_public_key, public_key_to_address, to_checksum_address, parse_address,
    Transaction, SignedTransaction, build_and_sign, DerivationPath, Network, Wallet,
)

__version__ = "0.1.0"
