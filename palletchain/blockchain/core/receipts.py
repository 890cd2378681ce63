"""
Block and extrinsic receipts.

A BlockReceipt records, for one executed block, the outcome of every
extrinsic in order. The ReceiptStore keeps recent ones for querying.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging
from threading import RLock

logger = logging.getLogger(__name__)

STATUS_APPLIED = "applied"
STATUS_FAILED = "failed"


@dataclass
class ExtrinsicReceipt:
    """
    Outcome of one extrinsic.

    Attributes:
        block_number: Block the extrinsic was executed in
        index: Position inside the block
        caller: Account the call was dispatched for
        pallet: Target pallet name
        method: Call variant name
        status: 'applied' or 'failed'
        error: DispatchError.to_dict() when failed
        extrinsic_hash: Hash of the extrinsic
    """
    block_number: int
    index: int
    caller: str
    pallet: str
    method: str
    status: str
    error: Optional[Dict[str, Any]] = None
    extrinsic_hash: str = ""

    @property
    def ok(self) -> bool:
        return self.status == STATUS_APPLIED

    def to_dict(self) -> dict:
        return {
            "block_number": self.block_number,
            "index": self.index,
            "caller": self.caller,
            "pallet": self.pallet,
            "method": self.method,
            "status": self.status,
            "error": self.error,
            "extrinsic_hash": self.extrinsic_hash,
        }


@dataclass
class BlockReceipt:
    block_number: int
    block_hash: str
    state_root: str = ""
    extrinsics: List[ExtrinsicReceipt] = field(default_factory=list)

    @property
    def applied_count(self) -> int:
        return sum(1 for r in self.extrinsics if r.ok)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.extrinsics if not r.ok)

    def failures(self) -> List[ExtrinsicReceipt]:
        return [r for r in self.extrinsics if not r.ok]

    def to_dict(self) -> dict:
        return {
            "block_number": self.block_number,
            "block_hash": self.block_hash,
            "state_root": self.state_root,
            "applied": self.applied_count,
            "failed": self.failed_count,
            "extrinsics": [r.to_dict() for r in self.extrinsics],
        }


class ReceiptStore:
    """
    Keeps the most recent block receipts, keyed by block number.

    With a runtime that does not advance its own block number the same
    number can be executed more than once; the newest receipt wins.
    """

    def __init__(self, max_receipts: int = 1000):
        self.receipts: Dict[int, BlockReceipt] = {}
        self.max_receipts = max_receipts
        self.lock = RLock()

    def add(self, receipt: BlockReceipt) -> None:
        with self.lock:
            # Re-insert so that dict order stays oldest-first
            self.receipts.pop(receipt.block_number, None)
            self.receipts[receipt.block_number] = receipt

            while len(self.receipts) > self.max_receipts:
                oldest = next(iter(self.receipts))
                del self.receipts[oldest]
                logger.debug(f"Dropped receipt for block {oldest}")

    def get(self, block_number: int) -> Optional[BlockReceipt]:
        with self.lock:
            return self.receipts.get(block_number)

    def latest(self) -> Optional[BlockReceipt]:
        with self.lock:
            if not self.receipts:
                return None
            return next(reversed(self.receipts.values()))

    def __len__(self) -> int:
        return len(self.receipts)

    def clear(self) -> None:
        """Clear all receipts (for testing)."""
        with self.lock:
            self.receipts.clear()
