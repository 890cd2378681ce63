# MIT License
# Copyright (c) 2025 Hashborn

"""
Plumbing shared by every pallet: the config contract check and the
dispatch contract.

A pallet states which config slots it reads and what each slot's type must
be able to do::

    CONFIG_CONTRACT = {
        "account_id": (ORDERED_KEY,),
        "balance": ("zero", "checked_add", "checked_sub", "contains"),
    }

Capabilities are method names looked up on the slot value, except
``ORDERED_KEY`` which requires a hashable, totally ordered Python type usable
as a storage key.
"""

from typing import Any, Dict, Mapping, Tuple, TypeVar
import logging

from ...protocol.types.common import ConfigError, PalletId, UnknownCall

logger = logging.getLogger(__name__)

ORDERED_KEY = "ordered_key"

K = TypeVar("K")
V = TypeVar("V")


def _is_ordered_key(value: Any) -> bool:
    return (
        isinstance(value, type)
        and value.__hash__ is not None
        and value.__lt__ is not object.__lt__
    )


def require_config(config: Any, pallet: str, contract: Mapping[str, Tuple[str, ...]]) -> None:
    """Raises ConfigError if `config` lacks a slot or a slot lacks a capability."""
    for slot, capabilities in contract.items():
        if not hasattr(config, slot):
            raise ConfigError(f"{pallet}: config is missing slot '{slot}'")
        value = getattr(config, slot)
        for cap in capabilities:
            if cap == ORDERED_KEY:
                if not _is_ordered_key(value):
                    raise ConfigError(f"{pallet}: slot '{slot}' must be a hashable, ordered type")
            elif not callable(getattr(value, cap, None)):
                raise ConfigError(f"{pallet}: slot '{slot}' ({value}) does not support '{cap}'")


def sorted_view(storage: Dict[K, V]) -> Dict[K, V]:
    """Copy of a storage map in key order, so iteration is deterministic."""
    return {k: storage[k] for k in sorted(storage)}


class Pallet:
    """
    Base for all pallets.

    Subclasses set PALLET_ID and CONFIG_CONTRACT and own their storage.
    Pallets with calls override `dispatch(caller, call)`: return None on
    success, raise a DispatchError subclass on failure. The caller is always
    passed separately and never read from the call.
    """
    PALLET_ID: PalletId
    CONFIG_CONTRACT: Dict[str, Tuple[str, ...]] = {}

    def __init__(self, config: Any):
        require_config(config, self.PALLET_ID.value, self.CONFIG_CONTRACT)
        self.config = config
        logger.debug(f"Pallet '{self.PALLET_ID.value}' configured for runtime "
                     f"'{getattr(config, 'runtime_id', '?')}'")

    def dispatch(self, caller: Any, call: Any) -> None:
        raise UnknownCall(f"Pallet '{self.PALLET_ID.value}' has no dispatchable calls")
