# MIT License
# Copyright (c) 2025 Hashborn

"""
Fixed-width unsigned integer primitives.

Pallets never do raw ``+``/``-`` on stored values; they go through the
primitive chosen by the runtime config so the same pallet code works with a
32-bit or a 128-bit balance.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .common import Overflow


@dataclass(frozen=True)
class UnsignedInt:
    name: str
    bits: int

    @property
    def max_value(self) -> int:
        return (1 << self.bits) - 1

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def contains(self, value: int) -> bool:
        # bool is an int subclass but never a valid amount
        if not isinstance(value, int) or isinstance(value, bool):
            return False
        return 0 <= value <= self.max_value

    def checked_add(self, a: int, b: int) -> Optional[int]:
        """Returns a + b, or None if the result leaves the type's range."""
        result = a + b
        if not self.contains(result):
            return None
        return result

    def checked_sub(self, a: int, b: int) -> Optional[int]:
        """Returns a - b, or None on underflow."""
        result = a - b
        if not self.contains(result):
            return None
        return result

    def successor(self, value: int) -> int:
        nxt = self.checked_add(value, self.one())
        if nxt is None:
            raise Overflow(f"{self.name} successor of {value} exceeds {self.max_value}")
        return nxt

    def __str__(self) -> str:
        return self.name


U8 = UnsignedInt("u8", 8)
U16 = UnsignedInt("u16", 16)
U32 = UnsignedInt("u32", 32)
U64 = UnsignedInt("u64", 64)
U128 = UnsignedInt("u128", 128)

PRIMITIVES: Dict[str, UnsignedInt] = {p.name: p for p in (U8, U16, U32, U64, U128)}
