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


class ConfigJSON(typing.TypedDict):
    admin: str
    lumi_mint: str
    mint_authority_bump: int
    daily_cap_per_issuer: int


@dataclass
class Config:
    discriminator: typing.ClassVar = account_discriminator("Config")
    layout: typing.ClassVar = borsh.CStruct(
        "admin" / BorshPubkey,
        "lumi_mint" / BorshPubkey,
        "mint_authority_bump" / borsh.U8,
        "daily_cap_per_issuer" / borsh.U64,
    )
    admin: Pubkey
    lumi_mint: Pubkey
    mint_authority_bump: int
    daily_cap_per_issuer: int

    @classmethod
    async def fetch(
        cls,
        conn: AsyncClient,
        address: Pubkey,
        commitment: typing.Optional[Commitment] = None,
        program_id: Pubkey = PROGRAM_ID,
    ) -> typing.Optional["Config"]:
        resp = await conn.get_account_info(address, commitment=commitment)
        info = resp.value
        if info is None:
            return None
        if info.owner != program_id:
            raise ValueError("Account does not belong to this program")
        bytes_data = info.data
        return cls.decode(bytes_data)

    @classmethod
    def decode(cls, data: bytes) -> "Config":
        if data[:ACCOUNT_DISCRIMINATOR_SIZE] != cls.discriminator:
            raise AccountInvalidDiscriminator(
                "The discriminator for this account is invalid"
            )
        dec = Config.layout.parse(data[ACCOUNT_DISCRIMINATOR_SIZE:])
        return cls(
            admin=dec.admin,
            lumi_mint=dec.lumi_mint,
            mint_authority_bump=dec.mint_authority_bump,
            daily_cap_per_issuer=dec.daily_cap_per_issuer,
        )

    def to_json(self) -> ConfigJSON:
        return {
            "admin": str(self.admin),
            "lumi_mint": str(self.lumi_mint),
            "mint_authority_bump": self.mint_authority_bump,
            "daily_cap_per_issuer": self.daily_cap_per_issuer,
        }

    @classmethod
    def from_json(cls, obj: ConfigJSON) -> "Config":
        return cls(
            admin=Pubkey.from_string(obj["admin"]),
            lumi_mint=Pubkey.from_string(obj["lumi_mint"]),
            mint_authority_bump=obj["mint_authority_bump"],
            daily_cap_per_issuer=obj["daily_cap_per_issuer"],
        )
