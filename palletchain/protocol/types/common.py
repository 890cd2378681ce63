# MIT License
# Copyright (c) 2025 Hashborn

from enum import Enum
from typing import Any, Dict, Optional


class PalletId(str, Enum):
    SYSTEM = "system"
    BALANCES = "balances"
    CLAIMS = "claims"


class ErrorKind(str, Enum):
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    OVERFLOW = "OVERFLOW"
    HEADER_MISMATCH = "HEADER_MISMATCH"
    BLOCK_NUMBER_EXHAUSTED = "BLOCK_NUMBER_EXHAUSTED"
    UNKNOWN_MODULE = "UNKNOWN_MODULE"
    UNKNOWN_CALL = "UNKNOWN_CALL"

    # Claims pallet
    CLAIM_ALREADY_EXISTS = "CLAIM_ALREADY_EXISTS"
    CLAIM_NOT_FOUND = "CLAIM_NOT_FOUND"
    NOT_CLAIM_OWNER = "NOT_CLAIM_OWNER"
    CLAIM_TOO_LONG = "CLAIM_TOO_LONG"


class ProtocolError(Exception):
    pass

class ValidationError(ProtocolError):
    pass

class ConfigError(ProtocolError):
    """A runtime config does not satisfy a pallet's contract."""
    pass


class DispatchError(ProtocolError):
    """
    Business failure of a single call.

    The executor catches these per extrinsic; they never abort a block.
    """
    kind: ErrorKind = ErrorKind.UNKNOWN_CALL

    def __init__(self, message: str, data: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.data = data

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out


class InsufficientFunds(DispatchError):
    kind = ErrorKind.INSUFFICIENT_FUNDS

class Overflow(DispatchError):
    kind = ErrorKind.OVERFLOW

class UnknownModule(DispatchError):
    kind = ErrorKind.UNKNOWN_MODULE

class UnknownCall(DispatchError):
    kind = ErrorKind.UNKNOWN_CALL

class ClaimAlreadyExists(DispatchError):
    kind = ErrorKind.CLAIM_ALREADY_EXISTS

class ClaimNotFound(DispatchError):
    kind = ErrorKind.CLAIM_NOT_FOUND

class NotClaimOwner(DispatchError):
    kind = ErrorKind.NOT_CLAIM_OWNER

class ClaimTooLong(DispatchError):
    kind = ErrorKind.CLAIM_TOO_LONG


class HeaderMismatch(ValidationError):
    """Incoming block number differs from the system block number."""
    kind = ErrorKind.HEADER_MISMATCH

    def __init__(self, expected: int, got: int):
        super().__init__(
            f"Incoming block number {got} does not match system block number {expected}"
        )
        self.expected = expected
        self.got = got

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": str(self),
            "data": {"expected": self.expected, "got": self.got},
        }


class BlockNumberExhausted(ValidationError):
    """The runtime advances its own block number and the current one has no successor."""
    kind = ErrorKind.BLOCK_NUMBER_EXHAUSTED

    def __init__(self, block_number: int, type_name: str):
        super().__init__(f"Block number {block_number} is the last {type_name} value; cannot advance")
        self.block_number = block_number

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": str(self),
            "data": {"block_number": self.block_number},
        }
