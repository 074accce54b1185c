"""
The walletcore standard formats
"""
from typing import Final

__all__ = ["ECC", "WALLET", "XKEYS", "ADDRESS", "RLP", "TX", "UNITS", "LOGGING"]


class ECC:
    COORD_BYTES: Final[int] = 32
    PRIVATE_KEY_BYTES: Final[int] = 32
    COMPRESSED_BYTES: Final[int] = 33
    RAW_PUBKEY_BYTES: Final[int] = 64
    UNCOMPRESSED_BYTES: Final[int] = 65


class WALLET:
    """
    We provide a Mnemonic dictionary which is BIP39 compliant. This forces the Mnemonic to be of a certain size
    depending on the entropy byte length chosen
    """
    MNEMONIC: Final[dict] = {
        16: {"bit_length": 128, "word_count": 12, "checksum_bits": 4},
        20: {"bit_length": 160, "word_count": 15, "checksum_bits": 5},
        24: {"bit_length": 192, "word_count": 18, "checksum_bits": 6},
        28: {"bit_length": 224, "word_count": 21, "checksum_bits": 7},
        32: {"bit_length": 256, "word_count": 24, "checksum_bits": 8},
    }
    ALLOWED_ENTROPY_BITS: Final[tuple] = (128, 160, 192, 224, 256)
    DEFAULT_ENTROPY_BITS: Final[int] = 128
    WORDLIST_SIZE: Final[int] = 2048
    WORD_BITS: Final[int] = 11
    BITLEN_KEY: Final[str] = "bit_length"
    WORD_KEY: Final[str] = "word_count"
    CHECKSUM_KEY: Final[str] = "checksum_bits"
    SEED_SALT: Final[str] = "mnemonic"
    SEED_ITERATIONS: Final[int] = 2048
    DKLEN: Final[int] = 64


class XKEYS:
    """
    Constants related to the extended private keys
    """
    SEED_KEY: Final[bytes] = b'Bitcoin seed'
    MIN_SEED_BYTES: Final[int] = 16
    MAX_SEED_BYTES: Final[int] = 64
    CHAIN_LENGTH: Final[int] = 32
    FINGERPRINT_BYTES: Final[int] = 4
    MAX_DEPTH: Final[int] = 255

    # Hardened derivation threshold
    HARDENED_OFFSET: Final[int] = 0x80000000
    MAX_INDEX: Final[int] = 0xffffffff


class ADDRESS:
    BYTES: Final[int] = 20
    HEX_CHARS: Final[int] = 40
    PREFIX: Final[str] = "0x"


class RLP:
    """
    Prefix bytes for the recursive length prefix encoding
    """
    SHORT_STRING: Final[int] = 0x80
    LONG_STRING: Final[int] = 0xb7
    SHORT_LIST: Final[int] = 0xc0
    LONG_LIST: Final[int] = 0xf7
    SHORT_LIMIT: Final[int] = 55
    MAX_DEPTH: Final[int] = 32


class TX:
    """
    Legacy transaction constants (EIP-155)
    """
    FIELD_COUNT: Final[int] = 9
    EIP155_OFFSET: Final[int] = 35
    DEFAULT_GAS_LIMIT: Final[int] = 21000
    SIGNATURE_BYTES: Final[int] = 32


class UNITS:
    """
    Number of wei in each named denomination
    """
    WEI_PER: Final[dict] = {
        "wei": 1,
        "kwei": 10 ** 3,
        "mwei": 10 ** 6,
        "gwei": 10 ** 9,
        "szabo": 10 ** 12,
        "finney": 10 ** 15,
        "ether": 10 ** 18,
    }


class LOGGING:
    DEFAULT_LEVEL: Final[str] = "WARNING"
    LEVEL_ENV: Final[str] = "WALLETCORE_LOG_LEVEL"
    FORMAT: Final[str] = '%(asctime)s [%(name)s] [%(levelname)s]: %(message)s'
