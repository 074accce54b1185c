"""
The custom exceptions used throughout walletcore
"""
__all__ = ["ValidationError", "CryptoError", "InvalidChildKeyError", "EncodingError", "ReadError"]


class ValidationError(Exception):
    """
    For malformed or out-of-range caller input: entropy sizes, wordlists, paths, addresses, amounts
    """
    pass


class CryptoError(Exception):
    """
    For invalid key material and signing failures
    """
    pass


class InvalidChildKeyError(CryptoError):
    """
    Raised when a child derivation yields IL >= n or a zero private key. The index is kept so the caller
    can move on to index + 1.
    """

    def __init__(self, index: int, message: str | None = None):
        self.index = index
        super().__init__(message or f"Derived key for child index {index} is invalid; use index {index + 1}")


class EncodingError(Exception):
    """
    For hex and RLP decoding failures
    """
    pass


class ReadError(EncodingError):
    """
    For when trying to read data of length n from the stream and receiving data of length < n
    """
    pass
