"""Consignment REST routes."""

from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from emcs.domain.consignment.command.create import (
    ConsignmentCreated,
    CreateConsignment,
    CreateConsignmentHandler,
)
from emcs.domain.consignment.command.dispatch import (
    ConsignmentDispatched,
    DispatchConsignment,
    DispatchConsignmentHandler,
)
from emcs.domain.consignment.command.receive import (
    ConsignmentReceived,
    ReceiveConsignment,
    ReceiveConsignmentHandler,
)
from emcs.domain.consignment.model.value import ConsignmentStatus
from emcs.domain.consignment.query.get_consignment import (
    ConsignmentDetail,
    GetConsignment,
    GetConsignmentHandler,
)
from emcs.domain.consignment.query.list_consignments import (
    ConsignmentList,
    ListConsignments,
    ListConsignmentsHandler,
)
from emcs.domain.consignment.query.list_events import (
    ListMovementEvents,
    ListMovementEventsHandler,
    MovementHistory,
)
from emcs.domain.consignment.query.reconcile import (
    ReconcileConsignment,
    ReconcileConsignmentHandler,
    ReconciliationReport,
)
from emcs.domain.consignment.query.verify_document import (
    DocumentVerification,
    VerifyDocument,
    VerifyDocumentHandler,
)

router = APIRouter(prefix="/consignments", tags=["Consignments"], route_class=DishkaRoute)


class PartyAction(BaseModel):
    """Body of dispatch/receive requests: the wallet address acting."""

    requester: str


class DocumentCheck(BaseModel):
    document: dict[str, Any]
    expected_hash: str


@router.post("", response_model=ConsignmentCreated, status_code=201)
async def create_consignment(
    body: CreateConsignment,
    handler: FromDishka[CreateConsignmentHandler],
) -> ConsignmentCreated:
    return await handler.run(body)


@router.get("", response_model=ConsignmentList)
async def list_consignments(
    party: str,
    handler: FromDishka[ListConsignmentsHandler],
    status: ConsignmentStatus | None = None,
) -> ConsignmentList:
    return await handler.run(ListConsignments(party=party, status=status))


@router.post("/documents/verify", response_model=DocumentVerification)
async def verify_document(
    body: DocumentCheck,
    handler: FromDishka[VerifyDocumentHandler],
) -> DocumentVerification:
    return await handler.run(
        VerifyDocument(document=body.document, expected_hash=body.expected_hash)
    )


@router.get("/{reference}", response_model=ConsignmentDetail)
async def get_consignment(
    reference: str,
    handler: FromDishka[GetConsignmentHandler],
) -> ConsignmentDetail:
    return await handler.run(GetConsignment(reference=reference))


@router.post("/{reference}/dispatch", response_model=ConsignmentDispatched)
async def dispatch_consignment(
    reference: str,
    body: PartyAction,
    handler: FromDishka[DispatchConsignmentHandler],
) -> ConsignmentDispatched:
    return await handler.run(DispatchConsignment(reference=reference, requester=body.requester))


@router.post("/{reference}/receive", response_model=ConsignmentReceived)
async def receive_consignment(
    reference: str,
    body: PartyAction,
    handler: FromDishka[ReceiveConsignmentHandler],
) -> ConsignmentReceived:
    return await handler.run(ReceiveConsignment(reference=reference, requester=body.requester))


@router.get("/{reference}/events", response_model=MovementHistory)
async def list_movement_events(
    reference: str,
    handler: FromDishka[ListMovementEventsHandler],
) -> MovementHistory:
    return await handler.run(ListMovementEvents(reference=reference))


@router.get("/{reference}/reconcile", response_model=ReconciliationReport)
async def reconcile_consignment(
    reference: str,
    handler: FromDishka[ReconcileConsignmentHandler],
) -> ReconciliationReport:
    return await handler.run(ReconcileConsignment(reference=reference))
