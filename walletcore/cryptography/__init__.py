"""
Elliptic curve cryptography and hash functions
"""
# cryptography/__init__.py
from walletcore.cryptography.ecc import *
from walletcore.cryptography.ecc_keys import *
from walletcore.cryptography.ecdsa import *
from walletcore.cryptography.hash_functions import *
