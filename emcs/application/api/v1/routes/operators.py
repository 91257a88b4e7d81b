"""Excise operator registry routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from emcs.domain.consignment.query.get_operator import (
    GetOperator,
    GetOperatorHandler,
    OperatorDetail,
)
from emcs.domain.consignment.query.list_operators import (
    ListOperators,
    ListOperatorsHandler,
    OperatorList,
)

router = APIRouter(prefix="/operators", tags=["Operators"], route_class=DishkaRoute)


@router.get("", response_model=OperatorList)
async def list_operators(handler: FromDishka[ListOperatorsHandler]) -> OperatorList:
    return await handler.run(ListOperators())


@router.get("/{address}", response_model=OperatorDetail)
async def get_operator(
    address: str,
    handler: FromDishka[GetOperatorHandler],
) -> OperatorDetail:
    return await handler.run(GetOperator(address=address))
