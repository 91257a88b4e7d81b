"""Static excise operator registry."""

from collections.abc import Iterable

from emcs.config import OperatorConfig, RegistryConfig
from emcs.domain.consignment.model.value import GoodsCategory, PartyId
from emcs.domain.consignment.port.party_directory import PartyDirectory, PartyInfo

# Demo operators available on a fresh install
DEFAULT_OPERATORS: list[PartyInfo] = [
    PartyInfo(
        party_id=PartyId("0x1234567890abcdef1234567890abcdef1234567890abcdef1234567890abcdef"),
        excise_number="IE00445790001",
        company_name="Dublin Old Brewery",
        vat_number="IE445790001",
        country="Ireland",
        address="34 Lansdowne Road, Ballsbridge, Dublin 4, D04",
        authorized_goods=list(GoodsCategory),
    ),
    PartyInfo(
        party_id=PartyId("0x7db01866e872de911ee8d7632a6b30452e97f6ef206504aa534577391e02606a"),
        excise_number="IE00445790002",
        company_name="Tesco Ireland Limited",
        vat_number="IE445790002",
        country="Ireland",
        address="Gresham House, Marine Road, Dun Laoghaire, Co. Dublin, A96 E0X0",
        authorized_goods=list(GoodsCategory),
    ),
    PartyInfo(
        party_id=PartyId("0x5d3b4d49f8260a11a31fe73cda9a43a0f92f3e734d808a3481169aeb3cf6c54a"),
        excise_number="CZ00377062888",
        company_name="Pilsner Urquell Brewery",
        vat_number="CZ377062888",
        country="Czech Republic",
        address="U Prazdroje 64/7, Plzeň, 301 00",
        authorized_goods=[GoodsCategory.BEER, GoodsCategory.WINE, GoodsCategory.SPIRITS],
    ),
    PartyInfo(
        party_id=PartyId("0x7080d6f152f38c5377001df35fe0e5c9d5a16f7579fcf322d843a5f40813a730"),
        excise_number="DE00098765432",
        company_name="Berlin Beverages GmbH",
        vat_number="DE98765432109",
        country="Germany",
        address="456 Hauptstraße, Berlin, 10115",
        authorized_goods=[GoodsCategory.WINE, GoodsCategory.BEER, GoodsCategory.SPIRITS],
    ),
    PartyInfo(
        party_id=PartyId("0x9545bcc34cc03a986892687715ef2849c0623e22c081a20c8ef2c1f44bd0ac03"),
        excise_number="IT00055544433",
        company_name="Milano Spirits Import SRL",
        vat_number="IT55544433221",
        country="Italy",
        address="789 Via Roma, Milano, 20121",
        authorized_goods=[GoodsCategory.WINE, GoodsCategory.SPIRITS],
    ),
]


def operator_from_config(operator: OperatorConfig) -> PartyInfo:
    return PartyInfo(
        party_id=PartyId(operator.address),
        excise_number=operator.excise_number,
        company_name=operator.company_name,
        vat_number=operator.vat_number,
        country=operator.country,
        address=operator.address_line,
        authorized_goods=list(operator.authorized_goods),
    )


class StaticPartyDirectory(PartyDirectory):
    """In-memory directory keyed by lowercased wallet address."""

    def __init__(self, operators: Iterable[PartyInfo]) -> None:
        self._operators = {op.party_id.lower(): op for op in operators}

    @classmethod
    def from_config(cls, config: RegistryConfig) -> "StaticPartyDirectory":
        # Configured operators override defaults with the same address
        operators = list(DEFAULT_OPERATORS) if config.seed_defaults else []
        operators.extend(operator_from_config(op) for op in config.operators)
        return cls(operators)

    async def lookup(self, party_id: str) -> PartyInfo | None:
        return self._operators.get(party_id.lower())

    async def list_all(self) -> list[PartyInfo]:
        return list(self._operators.values())
