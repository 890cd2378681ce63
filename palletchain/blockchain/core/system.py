# MIT License
# Copyright (c) 2025 Hashborn

from typing import Any, Dict

from ...protocol.types.common import PalletId
from .support import ORDERED_KEY, Pallet, sorted_view


class SystemPallet(Pallet):
    """Current block number and per-account nonces."""

    PALLET_ID = PalletId.SYSTEM
    CONFIG_CONTRACT = {
        "account_id": (ORDERED_KEY,),
        "block_number": ("zero", "successor"),
        "nonce": ("zero", "successor"),
    }

    def __init__(self, config: Any):
        super().__init__(config)
        self._block_number = config.block_number.zero()
        self._nonces: Dict[Any, int] = {}

    def block_number(self) -> int:
        return self._block_number

    def increment_block_number(self) -> None:
        self._block_number = self.config.block_number.successor(self._block_number)

    def increment_nonce(self, who: Any) -> None:
        self._nonces[who] = self.config.nonce.successor(self.get_nonce(who))

    def get_nonce(self, who: Any) -> int:
        # Pure lookup: unknown accounts are not inserted
        return self._nonces.get(who, self.config.nonce.zero())

    def nonces(self) -> Dict[Any, int]:
        return sorted_view(self._nonces)
