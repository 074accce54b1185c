"""
Fixtures used in the tests
"""
from itertools import count

import pytest

from walletcore.wallet import EntropySource, ExtendedKey

# BIP32 test vector 1
BIP32_SEED = bytes.fromhex("000102030405060708090a0b0c0d0e0f")


def counting_randbytes():
    """
    Return a randbytes callable yielding 00 01 02 ... so generated entropy is reproducible
    """
    counter = count()

    def randbytes(n: int) -> bytes:
        return bytes(next(counter) % 256 for _ in range(n))

    return randbytes


@pytest.fixture()
def fixed_source():
    return EntropySource(counting_randbytes())


@pytest.fixture()
def zero_source():
    return EntropySource(lambda n: b'\x00' * n)


@pytest.fixture(scope="module")
def bip32_master():
    return ExtendedKey.from_master_seed(BIP32_SEED)


def nested_rlp_lists(depth: int) -> bytes:
    """
    RLP bytes of an empty list wrapped in depth further lists, built without recursion
    """
    encoded = b'\xc0'
    for _ in range(depth):
        length = len(encoded)
        if length <= 55:
            prefix = bytes([0xc0 + length])
        else:
            length_bytes = length.to_bytes((length.bit_length() + 7) // 8, "big")
            prefix = bytes([0xf7 + len(length_bytes)]) + length_bytes
        encoded = prefix + encoded
    return encoded


@pytest.fixture()
def nested_rlp():
    return nested_rlp_lists
