"""
Loads a given wordlist
"""
from functools import lru_cache
from pathlib import Path
from typing import Iterator

from walletcore.core import WALLET, ValidationError, get_logger

__all__ = ["Wordlist", "load_wordlist", "default_wordlist", "DEFAULT_FILE"]

DEFAULT_FILE = Path(__file__).parent / "wordlists" / "english.txt"

logger = get_logger(__name__)


class Wordlist:
    """
    An immutable 2048-word dictionary. Position in the list is the 11-bit word index.
    """
    __slots__ = ("_words", "_index", "name")

    def __init__(self, words, name: str = "custom"):
        words = tuple(words)
        if len(words) != WALLET.WORDLIST_SIZE:
            raise ValidationError(f"Wordlist must contain exactly {WALLET.WORDLIST_SIZE} words, got {len(words)}")
        if any(not word or any(c.isspace() for c in word) for word in words):
            raise ValidationError("Wordlist entries must be single non-empty words")
        index = {word: i for i, word in enumerate(words)}
        if len(index) != len(words):
            raise ValidationError("Wordlist contains duplicate words")
        self._words = words
        self._index = index
        self.name = name

    def __len__(self) -> int:
        return len(self._words)

    def __getitem__(self, item: int) -> str:
        return self._words[item]

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __contains__(self, word) -> bool:
        return word in self._index

    def __repr__(self) -> str:
        return f"Wordlist(name={self.name!r}, words={len(self._words)})"

    def index(self, word: str) -> int:
        """Return the index of the word, raising ValueError if unknown (same contract as list.index)"""
        try:
            return self._index[word]
        except KeyError:
            raise ValueError(f"{word!r} is not in wordlist") from None


def load_wordlist(wordlist_file: Path = DEFAULT_FILE) -> Wordlist:
    """Return the wordlist file as a Wordlist. One word per line, UTF-8; line number is the word index."""
    wordlist_file = Path(wordlist_file)
    with wordlist_file.open(encoding="utf-8") as f:
        words = [line.rstrip("\r\n") for line in f]
    logger.debug("Loaded %d words from %s", len(words), wordlist_file)
    return Wordlist(words, name=wordlist_file.stem)


@lru_cache(maxsize=1)
def default_wordlist() -> Wordlist:
    """The English BIP39 wordlist, loaded once per process"""
    return load_wordlist(DEFAULT_FILE)
