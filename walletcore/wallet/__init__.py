"""
All classes and methods which have to do with the wallet pipeline
"""
# wallet/__init__.py
from walletcore.wallet.address import *
from walletcore.wallet.derivation import *
from walletcore.wallet.entropy import *
from walletcore.wallet.mnemonic import *
from walletcore.wallet.network import *
from walletcore.wallet.seed import *
from walletcore.wallet.transaction import *
from walletcore.wallet.wallet import *
from walletcore.wallet.xkeys import *
