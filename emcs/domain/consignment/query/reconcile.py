from typing import Any

from emcs.domain.consignment.service.lifecycle import ConsignmentLifecycle
from emcs.domain.reference.service.reference import require_well_formed
from emcs.domain.shared.query import Query, QueryHandler, Result


class ReconcileConsignment(Query):
    reference: str


class ReconciliationReport(Result):
    reference: str
    verified: bool
    checks: dict[str, bool]
    ledger_record: dict[str, Any] | None = None


class ReconcileConsignmentHandler(QueryHandler[ReconcileConsignment, ReconciliationReport]):
    """Customs check: does the stored consignment match the ledger?"""

    lifecycle: ConsignmentLifecycle

    async def run(self, query: ReconcileConsignment) -> ReconciliationReport:
        result = await self.lifecycle.reconcile(require_well_formed(query.reference))
        return ReconciliationReport(
            reference=result.reference,
            verified=result.verified,
            checks=result.checks,
            ledger_record=result.ledger_record,
        )
