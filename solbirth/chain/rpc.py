from dataclasses import dataclass
from typing import List, Optional

from solana.rpc.async_api import AsyncClient
from solders.pubkey import Pubkey
from solders.signature import Signature

from solbirth.config import CONFIG
from solbirth.errors import InvalidIdentifier


@dataclass(frozen=True)
class RecordSummary:
    handle: str               # transaction signature (base58)
    slot: int
    timestamp: Optional[int]  # block time, unix seconds


def parse_program_id(program_id: str) -> Pubkey:
    try:
        return Pubkey.from_string(program_id)
    except ValueError as e:
        raise InvalidIdentifier(program_id, e) from None


class RpcClient:
    """The two RPC calls the resolver needs, bound to one endpoint."""

    def __init__(self, endpoint: str, client: Optional[AsyncClient] = None):
        self.endpoint = endpoint
        self._client = client or AsyncClient(
            endpoint, commitment=CONFIG["COMMITMENT"], timeout=CONFIG["RPC_TIMEOUT"]
        )

    async def list_records(self, program_id: str, limit: int, before: Optional[str] = None) -> List[RecordSummary]:
        # newest -> oldest, as the node returns them
        resp = await self._client.get_signatures_for_address(
            parse_program_id(program_id),
            before=Signature.from_string(before) if before else None,
            limit=limit,
        )
        return [
            RecordSummary(handle=str(s.signature), slot=s.slot, timestamp=s.block_time)
            for s in (resp.value or [])
        ]

    async def get_record(self, handle: str) -> Optional[RecordSummary]:
        resp = await self._client.get_transaction(
            Signature.from_string(handle),
            commitment=CONFIG["COMMITMENT"],
            max_supported_transaction_version=0,
        )
        tx = resp.value
        if tx is None:
            return None
        return RecordSummary(handle=handle, slot=tx.slot, timestamp=tx.block_time)

    async def close(self):
        await self._client.close()


def get_client(endpoint: str) -> RpcClient:
    return RpcClient(endpoint)
