"""
The mnemonic codec: entropy + checksum <-> a phrase of dictionary words (BIP39).

The entropy is read as a big-endian bit string, the leading len(entropy_bits) / 32 bits of SHA256(entropy) are
appended, and the result is cut into 11-bit groups, each one an index into the 2048-word dictionary.
"""
from typing import Optional, Sequence

from walletcore.core import WALLET, ValidationError
from walletcore.cryptography import sha256
from walletcore.data import default_wordlist
from walletcore.wallet.entropy import EntropySource, generate_entropy

__all__ = ["Mnemonic", "entropy_to_mnemonic", "mnemonic_to_entropy", "validate_mnemonic"]

# --- CONSTANTS --- #
ALLOWED_ENTROPY_BYTELEN = tuple(WALLET.MNEMONIC.keys())
CHECKSUM_KEY = WALLET.CHECKSUM_KEY
WORD_KEY = WALLET.WORD_KEY
WORD_BITS = WALLET.WORD_BITS
WORD_MASK = (1 << WORD_BITS) - 1


def _resolve_wordlist(wordlist: Optional[Sequence[str]]) -> Sequence[str]:
    wordlist = default_wordlist() if wordlist is None else wordlist
    if len(wordlist) != WALLET.WORDLIST_SIZE:
        raise ValidationError(f"Wordlist must contain exactly {WALLET.WORDLIST_SIZE} words, got {len(wordlist)}")
    return wordlist


def _checksum(entropy: bytes) -> int:
    """
    Return the integer value of the leading checksum bits of SHA256(entropy)
    """
    checksum_bitlen = WALLET.MNEMONIC[len(entropy)][CHECKSUM_KEY]
    entropy_hash_int = int.from_bytes(sha256(entropy), "big")
    return entropy_hash_int >> (256 - checksum_bitlen)


def entropy_to_mnemonic(entropy: bytes, wordlist: Optional[Sequence[str]] = None) -> str:
    """
    Encode entropy of 16, 20, 24, 28 or 32 bytes as a space-joined phrase
    """
    if not isinstance(entropy, (bytes, bytearray)) or len(entropy) not in ALLOWED_ENTROPY_BYTELEN:
        length = len(entropy) if isinstance(entropy, (bytes, bytearray)) else type(entropy).__name__
        raise ValidationError(f"Invalid entropy length: {length}. Must be one of {ALLOWED_ENTROPY_BYTELEN} bytes")
    entropy = bytes(entropy)
    wordlist = _resolve_wordlist(wordlist)

    # Shift entropy_int by checksum_bitlen then OR the checksum_int to append it
    checksum_bitlen = WALLET.MNEMONIC[len(entropy)][CHECKSUM_KEY]
    ent_check = (int.from_bytes(entropy, "big") << checksum_bitlen) | _checksum(entropy)

    word_count = WALLET.MNEMONIC[len(entropy)][WORD_KEY]
    words = []
    for position in range(word_count):
        # 11-bit groups, most significant first
        shift = (word_count - 1 - position) * WORD_BITS
        word_index = (ent_check >> shift) & WORD_MASK
        if word_index >= len(wordlist):
            raise ValidationError(f"Word index {word_index} out of range for wordlist")
        words.append(wordlist[word_index])

    return " ".join(words)


def mnemonic_to_entropy(phrase: str | Sequence[str], wordlist: Optional[Sequence[str]] = None) -> bytes:
    """
    Decode a phrase back to its entropy, verifying word count, dictionary membership and the checksum
    """
    words = phrase.split() if isinstance(phrase, str) else list(phrase)
    wordlist = _resolve_wordlist(wordlist)

    entropy_bytelen = next(
        (bytelen for bytelen, params in WALLET.MNEMONIC.items() if params[WORD_KEY] == len(words)), None
    )
    if entropy_bytelen is None:
        allowed = [params[WORD_KEY] for params in WALLET.MNEMONIC.values()]
        raise ValidationError(f"Mnemonic has {len(words)} words. Must be one of {allowed}")

    ent_check = 0
    for word in words:
        try:
            word_index = wordlist.index(word)
        except ValueError:
            raise ValidationError(f"Word {word!r} is not in the wordlist") from None
        ent_check = (ent_check << WORD_BITS) | word_index

    checksum_bitlen = WALLET.MNEMONIC[entropy_bytelen][CHECKSUM_KEY]
    checksum = ent_check & ((1 << checksum_bitlen) - 1)
    entropy = (ent_check >> checksum_bitlen).to_bytes(entropy_bytelen, "big")

    if _checksum(entropy) != checksum:
        raise ValidationError("Mnemonic checksum does not match")
    return entropy


def validate_mnemonic(phrase: str | Sequence[str], wordlist: Optional[Sequence[str]] = None) -> bool:
    try:
        mnemonic_to_entropy(phrase, wordlist)
    except ValidationError:
        return False
    return True


class Mnemonic:
    """
    A mnemonic phrase. Constructed from a given phrase (validated), or from fresh entropy of the given bit length
    """
    __slots__ = ("phrase", "wordlist")

    def __init__(self, phrase: str | Sequence[str] | None = None, entropy_bits: int = WALLET.DEFAULT_ENTROPY_BITS,
                 wordlist: Optional[Sequence[str]] = None, entropy_source: Optional[EntropySource] = None):
        self.wordlist = _resolve_wordlist(wordlist)

        if phrase is not None:
            words = phrase.split() if isinstance(phrase, str) else list(phrase)
            # Raises ValidationError on bad words or checksum
            mnemonic_to_entropy(words, self.wordlist)
            self.phrase = " ".join(words)
        else:
            entropy = generate_entropy(entropy_bits, entropy_source)
            self.phrase = entropy_to_mnemonic(entropy, self.wordlist)

    @classmethod
    def from_entropy(cls, entropy: bytes, wordlist: Optional[Sequence[str]] = None) -> "Mnemonic":
        return cls(entropy_to_mnemonic(entropy, wordlist), wordlist=wordlist)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Mnemonic):
            return NotImplemented
        return self.phrase == other.phrase

    def __hash__(self) -> int:
        return hash(self.phrase)

    def __repr__(self) -> str:
        # The phrase is secret
        return f"Mnemonic(words={len(self.words)})"

    def __str__(self) -> str:
        return self.phrase

    @property
    def words(self) -> list[str]:
        return self.phrase.split(" ")

    def entropy(self) -> bytes:
        return mnemonic_to_entropy(self.phrase, self.wordlist)

    def validate(self) -> bool:
        return validate_mnemonic(self.phrase, self.wordlist)
