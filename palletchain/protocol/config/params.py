# MIT License
# Copyright (c) 2025 Hashborn

import os
from typing import Dict, Optional

from ..types.common import ConfigError
from ..types.numeric import UnsignedInt, U32, U64, U128

RUNTIME_ENV_VAR = "PALLETCHAIN_RUNTIME"
DEFAULT_RUNTIME = "devnet"

class RuntimeConfig:
    """
    One concrete type per pallet config slot, plus runtime knobs.

    This is the only place concrete types are chosen; every pallet reads its
    slots from here and checks them against its own contract on construction.
    """
    def __init__(self,
                 runtime_id: str,
                 account_id: type = str,
                 block_number: UnsignedInt = U32,
                 nonce: UnsignedInt = U32,
                 balance: UnsignedInt = U128,
                 claim_content: type = str,
                 # Executor
                 advance_block_number: bool = False,
                 # Claims pallet
                 max_claim_length: int = 256,
                 # Receipts kept in memory by the runtime
                 max_receipts: int = 1000):
        self.runtime_id = runtime_id
        self.account_id = account_id
        self.block_number = block_number
        self.nonce = nonce
        self.balance = balance
        self.claim_content = claim_content
        self.advance_block_number = advance_block_number
        self.max_claim_length = max_claim_length
        self.max_receipts = max_receipts

    def describe(self) -> Dict[str, object]:
        return {
            "runtime_id": self.runtime_id,
            "account_id": self.account_id.__name__,
            "block_number": str(self.block_number),
            "nonce": str(self.nonce),
            "balance": str(self.balance),
            "claim_content": self.claim_content.__name__,
            "advance_block_number": self.advance_block_number,
            "max_claim_length": self.max_claim_length,
            "max_receipts": self.max_receipts,
        }

RUNTIMES: Dict[str, RuntimeConfig] = {
    "devnet": RuntimeConfig(
        runtime_id="devnet",
        block_number=U32,
        nonce=U32,
        balance=U128,
    ),
    # Advances the block number itself after every accepted block
    "testnet": RuntimeConfig(
        runtime_id="testnet",
        block_number=U64,
        nonce=U64,
        balance=U64,
        advance_block_number=True,
        max_claim_length=128,
    ),
}

def get_runtime_config(name: Optional[str] = None) -> RuntimeConfig:
    """Resolves a named config: argument, then $PALLETCHAIN_RUNTIME, then devnet."""
    name = name or os.environ.get(RUNTIME_ENV_VAR) or DEFAULT_RUNTIME
    try:
        return RUNTIMES[name]
    except KeyError:
        raise ConfigError(f"Unknown runtime '{name}' (known: {', '.join(sorted(RUNTIMES))})")
