from pydantic import BaseModel, Field
from typing import Any, List
from ..crypto.hash import sha256_hex

class Header(BaseModel):
    block_number: int = Field(..., ge=0)

    def hash(self) -> str:
        return sha256_hex(str(self.block_number).encode("utf-8"))

class Extrinsic(BaseModel):
    # The runtime narrows `call` to its own RuntimeCall union.
    caller: str
    call: Any

    def hash(self) -> str:
        return sha256_hex(self.model_dump_json().encode("utf-8"))

class Block(BaseModel):
    header: Header
    extrinsics: List[Extrinsic] = Field(default_factory=list)

    def hash(self) -> str:
        # Header hash plus every extrinsic hash, in block order
        payload = self.header.hash() + "".join(x.hash() for x in self.extrinsics)
        return sha256_hex(payload.encode("utf-8"))
