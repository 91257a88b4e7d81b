from abc import abstractmethod
from typing import Protocol

from pydantic import Field

from emcs.domain.consignment.model.value import GoodsCategory, PartyId
from emcs.domain.shared.model.value import ValueObject
from emcs.domain.shared.port import Port


class PartyInfo(ValueObject):
    """Registered excise operator (display data and goods authorization)."""

    party_id: PartyId
    excise_number: str
    company_name: str
    vat_number: str = ""
    country: str = ""
    address: str = ""
    authorized_goods: list[GoodsCategory] = Field(default_factory=list)

    def may_move(self, category: GoodsCategory) -> bool:
        return category in self.authorized_goods


class PartyDirectory(Port, Protocol):
    @abstractmethod
    async def lookup(self, party_id: str) -> PartyInfo | None: ...

    @abstractmethod
    async def list_all(self) -> list[PartyInfo]: ...
