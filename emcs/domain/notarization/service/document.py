"""e-AD (electronic administrative document) construction."""

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from emcs.domain.consignment.model.aggregate import Consignment

EAD_DOCUMENT_TYPE = "e-AD"
EAD_VERSION = "1.0"

DocumentBuilder = Callable[["Consignment", datetime], dict[str, Any]]


def build_ead_document(consignment: "Consignment", issued_at: datetime) -> dict[str, Any]:
    """Shape the parts of a consignment that get notarized at dispatch.

    Transport and beer sections appear only when the consignment has them.
    """
    document: dict[str, Any] = {
        "documentType": EAD_DOCUMENT_TYPE,
        "version": EAD_VERSION,
        "arc": str(consignment.reference),
        "consignor": consignment.sender,
        "consignee": consignment.receiver,
        "goods": {
            "type": str(consignment.goods_category),
            "quantity": consignment.quantity,
            "unit": str(consignment.unit),
        },
        "movement": {
            "origin": consignment.origin,
            "destination": consignment.destination,
        },
        "timestamp": issued_at.isoformat(),
    }
    if consignment.transport is not None:
        document["movement"]["transport"] = {
            "modes": [str(mode) for mode in consignment.transport.modes],
            "vehicleLicensePlate": consignment.transport.vehicle_license_plate,
            "containerNumber": consignment.transport.container_number,
        }
    if consignment.beer is not None:
        document["goods"]["beer"] = {
            "name": consignment.beer.name,
            "alcoholPercentage": consignment.beer.alcohol_percentage,
        }
    if consignment.excise_duty is not None:
        document["goods"]["exciseDutyEUR"] = str(consignment.excise_duty)
    return document
