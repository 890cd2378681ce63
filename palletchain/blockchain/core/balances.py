# MIT License
# Copyright (c) 2025 Hashborn

from typing import Any, Dict, Literal
import logging

from pydantic import BaseModel, Field

from ...protocol.types.common import InsufficientFunds, Overflow, PalletId, UnknownCall
from .support import ORDERED_KEY, Pallet, sorted_view

logger = logging.getLogger(__name__)


# Calls exposed to the dispatcher. The caller is supplied by the dispatcher,
# so it never appears here.
class Transfer(BaseModel):
    method: Literal["transfer"] = "transfer"
    to: str
    amount: int = Field(..., ge=0)

# Single-variant union today; new calls join here with a distinct `method`.
Call = Transfer


class BalancesPallet(Pallet):
    PALLET_ID = PalletId.BALANCES
    CONFIG_CONTRACT = {
        "account_id": (ORDERED_KEY,),
        "balance": ("zero", "checked_add", "checked_sub", "contains"),
    }

    def __init__(self, config: Any):
        super().__init__(config)
        self._balances: Dict[Any, int] = {}

    def set_balance(self, who: Any, amount: int) -> None:
        """Overwrites (or creates) an account balance. Used for funding, not transfers."""
        if not self.config.balance.contains(amount):
            raise Overflow(f"{amount} is not a valid {self.config.balance} balance",
                           data={"account": str(who), "amount": amount})
        self._balances[who] = amount

    def balance(self, who: Any) -> int:
        return self._balances.get(who, self.config.balance.zero())

    def transfer(self, caller: Any, to: Any, amount: int) -> None:
        """
        Moves `amount` from `caller` to `to`.

        Both new balances are computed before either is written, so a failed
        check leaves storage untouched. For caller == to the credit applies
        to the already-debited value, which makes a self-transfer a no-op.

        Raises:
            Overflow: amount is not a value of the balance type, or the
                recipient balance plus amount exceeds it
            InsufficientFunds: caller balance minus amount underflows
        """
        num = self.config.balance
        if not num.contains(amount):
            raise Overflow(f"{amount} is not a valid {num} amount",
                           data={"account": str(caller), "amount": amount})

        from_balance = self.balance(caller)

        new_from_balance = num.checked_sub(from_balance, amount)
        if new_from_balance is None:
            raise InsufficientFunds(
                f"Insufficient balance: have {from_balance}, need {amount}",
                data={"account": str(caller), "balance": from_balance, "amount": amount},
            )

        to_balance = new_from_balance if to == caller else self.balance(to)
        new_to_balance = num.checked_add(to_balance, amount)
        if new_to_balance is None:
            raise Overflow(
                f"Credit of {amount} to {to} overflows {num} (balance {to_balance})",
                data={"account": str(to), "balance": to_balance, "amount": amount},
            )

        self._balances[caller] = new_from_balance
        self._balances[to] = new_to_balance
        logger.debug(f"Transferred {amount} from {caller} to {to}")

    def total_issuance(self) -> int:
        return sum(self._balances.values())

    def accounts(self) -> Dict[Any, int]:
        return sorted_view(self._balances)

    def dispatch(self, caller: Any, call: Call) -> None:
        if isinstance(call, Transfer):
            self.transfer(caller, call.to, call.amount)
        else:
            raise UnknownCall(f"Unknown balances call: {type(call).__name__}")
