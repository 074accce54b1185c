"""
Static resources and byte-level encodings: the wordlist, RLP and value units
"""
# data/__init__.py
from walletcore.data import rlp
from walletcore.data.units import *
from walletcore.data.wordlist import *
