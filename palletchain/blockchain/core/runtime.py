# MIT License
# Copyright (c) 2025 Hashborn

from typing import Annotated, Any, Dict, List, Literal, Optional, Union
import logging
import threading

from pydantic import BaseModel, Field

from ...protocol.types import block as block_types
from ...protocol.types.common import (
    BlockNumberExhausted, DispatchError, HeaderMismatch, PalletId, UnknownModule,
)
from ...protocol.config.params import RuntimeConfig, get_runtime_config
from ...protocol.crypto.hash import leaf_hash, merkle_root
from ..observability import metrics
from . import balances, claims
from .system import SystemPallet
from .balances import BalancesPallet
from .claims import ClaimsPallet
from .events import EventBus, BLOCK_EXECUTED, BLOCK_REJECTED, EXTRINSIC_APPLIED, EXTRINSIC_FAILED
from .receipts import BlockReceipt, ExtrinsicReceipt, ReceiptStore, STATUS_APPLIED, STATUS_FAILED

logger = logging.getLogger(__name__)


# Every call exposed to the world: one variant per pallet, each wrapping
# that pallet's own Call type.
class BalancesCall(BaseModel):
    pallet: Literal["balances"] = "balances"
    call: balances.Call

class ClaimsCall(BaseModel):
    pallet: Literal["claims"] = "claims"
    call: claims.Call

RuntimeCall = Annotated[Union[BalancesCall, ClaimsCall], Field(discriminator="pallet")]

Header = block_types.Header

class Extrinsic(block_types.Extrinsic):
    call: RuntimeCall

class Block(block_types.Block):
    extrinsics: List[Extrinsic] = Field(default_factory=list)


class Runtime:
    """
    Owns one instance of every pallet and executes blocks against them.

    Pallet state is only reached through the pallets' own methods, either
    directly (``runtime.balances.set_balance(...)`` for funding) or through
    ``dispatch`` while executing a block.
    """

    def __init__(self, config: Optional[RuntimeConfig] = None, events: Optional[EventBus] = None):
        self.config = config or get_runtime_config()
        self._lock = threading.RLock()

        self.system = SystemPallet(self.config)
        self.balances = BalancesPallet(self.config)
        self.claims = ClaimsPallet(self.config)

        # Each runtime gets its own bus unless one is shared explicitly
        self.events = events if events is not None else EventBus()
        self.receipts = ReceiptStore(max_receipts=self.config.max_receipts)

        logger.info(f"Runtime '{self.config.runtime_id}' initialized at block {self.system.block_number()}")

    # --- Genesis ---
    def apply_genesis(self, alloc: Dict[str, int]) -> None:
        """Funds accounts from a genesis allocation (address -> amount)."""
        for address in sorted(alloc):
            self.balances.set_balance(address, int(alloc[address]))
        logger.info(f"Applied genesis allocation to {len(alloc)} accounts.")

    # --- Dispatch ---
    def dispatch(self, caller: Any, runtime_call: RuntimeCall) -> None:
        """
        Routes a call to the pallet it names, on behalf of `caller`.

        Pure routing: no nonce bookkeeping, no business logic. Pallet errors
        propagate unchanged.
        """
        if isinstance(runtime_call, BalancesCall):
            self.balances.dispatch(caller, runtime_call.call)
        elif isinstance(runtime_call, ClaimsCall):
            self.claims.dispatch(caller, runtime_call.call)
        else:
            raise UnknownModule(f"No pallet handles {type(runtime_call).__name__}")

    # --- Block execution ---
    def execute_block(self, block: Block) -> BlockReceipt:
        with self._lock:
            return self._execute_block_impl(block)

    def _execute_block_impl(self, block: Block) -> BlockReceipt:
        expected = self.system.block_number()
        number = block.header.block_number

        # 1. Header check. Nothing has been touched yet if this fails.
        if number != expected:
            logger.warning(f"Rejected block {number}: system block number is {expected}")
            metrics.record_block_rejected()
            self.events.emit(BLOCK_REJECTED, block_number=number, expected=expected)
            raise HeaderMismatch(expected=expected, got=number)

        # Advancing must not be able to fail once extrinsics have been applied
        if self.config.advance_block_number and \
                self.config.block_number.checked_add(expected, 1) is None:
            logger.warning(f"Rejected block {number}: block number cannot advance past {expected}")
            metrics.record_block_rejected()
            self.events.emit(BLOCK_REJECTED, block_number=number, expected=expected)
            raise BlockNumberExhausted(expected, str(self.config.block_number))

        # 2. Extrinsics, strictly in order. Failures are recorded, not fatal.
        receipt = BlockReceipt(block_number=number, block_hash=block.hash())
        for index, extrinsic in enumerate(block.extrinsics):
            receipt.extrinsics.append(self._apply_extrinsic(number, index, extrinsic))

        if self.config.advance_block_number:
            self.system.increment_block_number()

        receipt.state_root = self.state_root()
        self.receipts.add(receipt)

        metrics.update_block_metrics(receipt)
        metrics.update_metrics(self)

        logger.info(
            f"Executed block {number}: {receipt.applied_count} applied, "
            f"{receipt.failed_count} failed"
        )
        self.events.emit(BLOCK_EXECUTED, receipt=receipt)
        return receipt

    def _apply_extrinsic(self, block_number: int, index: int, extrinsic: Extrinsic) -> ExtrinsicReceipt:
        caller, call = extrinsic.caller, extrinsic.call
        result = ExtrinsicReceipt(
            block_number=block_number,
            index=index,
            caller=str(caller),
            pallet=getattr(call, "pallet", "unknown"),
            method=getattr(getattr(call, "call", None), "method", type(call).__name__),
            status=STATUS_APPLIED,
            extrinsic_hash=extrinsic.hash(),
        )

        try:
            # The nonce counts every processed extrinsic, whatever the outcome
            self.system.increment_nonce(caller)
            self.dispatch(caller, call)
        except DispatchError as e:
            logger.warning(
                f"Extrinsic error: block {block_number}, extrinsic {index}, "
                f"caller {caller}: {e}"
            )
            result.status = STATUS_FAILED
            result.error = e.to_dict()
            self.events.emit(EXTRINSIC_FAILED, receipt=result)
            return result

        self.events.emit(EXTRINSIC_APPLIED, receipt=result)
        return result

    # --- State inspection ---
    def state_root(self) -> str:
        """Merkle root over every pallet's storage, in a fixed order."""
        leaves = [leaf_hash(PalletId.SYSTEM.value, "block_number", self.system.block_number())]
        for who, nonce in self.system.nonces().items():
            leaves.append(leaf_hash(PalletId.SYSTEM.value, "nonce", who, nonce))
        for who, amount in self.balances.accounts().items():
            leaves.append(leaf_hash(PalletId.BALANCES.value, who, amount))
        for claim, owner in self.claims.claims().items():
            leaves.append(leaf_hash(PalletId.CLAIMS.value, claim, owner))
        return merkle_root(leaves).hex()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "runtime_id": self.config.runtime_id,
            "block_number": self.system.block_number(),
            "nonces": self.system.nonces(),
            "balances": self.balances.accounts(),
            "claims": self.claims.claims(),
            "total_issuance": self.balances.total_issuance(),
            "state_root": self.state_root(),
        }
