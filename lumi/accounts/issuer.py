import typing
from dataclasses import dataclass
from solders.pubkey import Pubkey
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
import borsh_construct as borsh
from anchorpy.coder.accounts import ACCOUNT_DISCRIMINATOR_SIZE
from anchorpy.error import AccountInvalidDiscriminator
from anchorpy.borsh_extension import BorshPubkey
from ..instructions.common import account_discriminator
from ..program_id import PROGRAM_ID


class IssuerJSON(typing.TypedDict):
    wallet: str
    issued_today: int
    last_issue_day: int
    active: bool


@dataclass
class Issuer:
    discriminator: typing.ClassVar = account_discriminator("Issuer")
    layout: typing.ClassVar = borsh.CStruct(
        "wallet" / BorshPubkey,
        "issued_today" / borsh.U64,
        "last_issue_day" / borsh.U64,
        "active" / borsh.Bool,
    )
    wallet: Pubkey
    issued_today: int
    last_issue_day: int
    active: bool

    @classmethod
    async def fetch(
        cls,
        conn: AsyncClient,
        address: Pubkey,
        commitment: typing.Optional[Commitment] = None,
        program_id: Pubkey = PROGRAM_ID,
    ) -> typing.Optional["Issuer"]:
        resp = await conn.get_account_info(address, commitment=commitment)
        info = resp.value
        if info is None:
            return None
        if info.owner != program_id:
            raise ValueError("Account does not belong to this program")
        bytes_data = info.data
        return cls.decode(bytes_data)

    @classmethod
    def decode(cls, data: bytes) -> "Issuer":
        if data[:ACCOUNT_DISCRIMINATOR_SIZE] != cls.discriminator:
            raise AccountInvalidDiscriminator(
                "The discriminator for this account is invalid"
            )
        dec = Issuer.layout.parse(data[ACCOUNT_DISCRIMINATOR_SIZE:])
        return cls(
            wallet=dec.wallet,
            issued_today=dec.issued_today,
            last_issue_day=dec.last_issue_day,
            active=dec.active,
        )

    def to_json(self) -> IssuerJSON:
        return {
            "wallet": str(self.wallet),
            "issued_today": self.issued_today,
            "last_issue_day": self.last_issue_day,
            "active": self.active,
        }

    @classmethod
    def from_json(cls, obj: IssuerJSON) -> "Issuer":
        return cls(
            wallet=Pubkey.from_string(obj["wallet"]),
            issued_today=obj["issued_today"],
            last_issue_day=obj["last_issue_day"],
            active=obj["active"],
        )
