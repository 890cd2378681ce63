# MIT License
# Copyright (c) 2025 Hashborn

"""
Claims pallet: records a piece of content against the account that claimed
it first. Only the owner may revoke a claim; once revoked anyone may claim it
again.
"""

from typing import Annotated, Any, Dict, Literal, Optional, Union
import logging

from pydantic import BaseModel, Field

from ...protocol.types.common import (
    ClaimAlreadyExists, ClaimNotFound, ClaimTooLong, NotClaimOwner, PalletId, UnknownCall,
)
from .support import ORDERED_KEY, Pallet, sorted_view

logger = logging.getLogger(__name__)


class CreateClaim(BaseModel):
    method: Literal["create_claim"] = "create_claim"
    claim: str

class RevokeClaim(BaseModel):
    method: Literal["revoke_claim"] = "revoke_claim"
    claim: str

Call = Annotated[Union[CreateClaim, RevokeClaim], Field(discriminator="method")]


class ClaimsPallet(Pallet):
    PALLET_ID = PalletId.CLAIMS
    CONFIG_CONTRACT = {
        "account_id": (ORDERED_KEY,),
        "claim_content": (ORDERED_KEY,),
        "max_claim_length": (),
    }

    def __init__(self, config: Any):
        super().__init__(config)
        self._claims: Dict[Any, Any] = {}

    def get_claim(self, claim: Any) -> Optional[Any]:
        return self._claims.get(claim)

    def _check_length(self, claim: Any) -> None:
        limit = self.config.max_claim_length
        if len(claim) > limit:
            raise ClaimTooLong(f"Claim too long ({len(claim)} > {limit})",
                               data={"length": len(claim), "max": limit})

    def create_claim(self, caller: Any, claim: Any) -> None:
        self._check_length(claim)
        owner = self._claims.get(claim)
        if owner is not None:
            raise ClaimAlreadyExists(f"Claim already owned by {owner}", data={"owner": str(owner)})
        self._claims[claim] = caller
        logger.debug(f"{caller} claimed {claim!r}")

    def revoke_claim(self, caller: Any, claim: Any) -> None:
        self._check_length(claim)
        owner = self._claims.get(claim)
        if owner is None:
            raise ClaimNotFound("Claim does not exist")
        if owner != caller:
            raise NotClaimOwner(f"Claim is owned by {owner}, not {caller}",
                                data={"owner": str(owner)})
        del self._claims[claim]
        logger.debug(f"{caller} revoked {claim!r}")

    def claims(self) -> Dict[Any, Any]:
        return sorted_view(self._claims)

    def dispatch(self, caller: Any, call: Call) -> None:
        if isinstance(call, CreateClaim):
            self.create_claim(caller, call.claim)
        elif isinstance(call, RevokeClaim):
            self.revoke_claim(caller, call.claim)
        else:
            raise UnknownCall(f"Unknown claims call: {type(call).__name__}")
