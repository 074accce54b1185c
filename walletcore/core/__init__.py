"""
Contains the core elements that are used within walletcore

Core:
    -Provides the reference formats and constants
    -Provides custom exceptions for the wallet pipeline
    -Provides byte stream helpers, the Serializable protocol and logging
"""
# core/__init__.py
from walletcore.core.byte_stream import *
from walletcore.core.exceptions import *
from walletcore.core.formats import *
from walletcore.core.logging import *
from walletcore.core.serializable import *
