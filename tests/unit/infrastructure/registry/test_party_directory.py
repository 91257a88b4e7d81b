import pytest

from emcs.config import OperatorConfig, RegistryConfig
from emcs.domain.consignment.model.value import GoodsCategory
from emcs.infrastructure.registry.party_directory import StaticPartyDirectory

DUBLIN = "0x1234567890abcdef1234567890abcdef1234567890abcdef1234567890abcdef"


class TestStaticPartyDirectory:
    @pytest.mark.asyncio
    async def test_default_operators(self):
        directory = StaticPartyDirectory.from_config(RegistryConfig())

        operator = await directory.lookup(DUBLIN)

        assert operator.excise_number == "IE00445790001"
        assert operator.may_move(GoodsCategory.TOBACCO)

    @pytest.mark.asyncio
    async def test_lookup_is_case_insensitive(self):
        directory = StaticPartyDirectory.from_config(RegistryConfig())
        assert await directory.lookup(DUBLIN.upper().replace("0X", "0x")) is not None

    @pytest.mark.asyncio
    async def test_unknown_party(self):
        directory = StaticPartyDirectory.from_config(RegistryConfig())
        assert await directory.lookup("0xdead") is None

    @pytest.mark.asyncio
    async def test_configured_operators_without_defaults(self):
        config = RegistryConfig(
            seed_defaults=False,
            operators=[
                OperatorConfig(
                    address="0xAbC",
                    excise_number="FR00000000001",
                    company_name="Cave de Test",
                    authorized_goods=[GoodsCategory.WINE],
                )
            ],
        )
        directory = StaticPartyDirectory.from_config(config)

        operator = await directory.lookup("0xabc")

        assert operator.company_name == "Cave de Test"
        assert operator.may_move(GoodsCategory.WINE)
        assert not operator.may_move(GoodsCategory.BEER)
        assert await directory.lookup(DUBLIN) is None
