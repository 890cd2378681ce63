# MIT License
# Copyright (c) 2025 Hashborn

"""
PalletChain: a deterministic, in-memory state-transition runtime composed of
independently written pallets.
"""

__version__ = "0.1.0"
