from typing import Any

from emcs.domain.notarization.service.canonical import compute_hash
from emcs.domain.notarization.service.notarizer import DocumentNotarizer
from emcs.domain.shared.query import Query, QueryHandler, Result


class VerifyDocument(Query):
    document: dict[str, Any]
    expected_hash: str


class DocumentVerification(Result):
    valid: bool
    expected_hash: str
    actual_hash: str | None = None


class VerifyDocumentHandler(QueryHandler[VerifyDocument, DocumentVerification]):
    notarizer: DocumentNotarizer

    async def run(self, query: VerifyDocument) -> DocumentVerification:
        valid = self.notarizer.verify(query.document, query.expected_hash)
        try:
            actual = compute_hash(query.document)
        except (TypeError, ValueError):
            actual = None
        return DocumentVerification(
            valid=valid,
            expected_hash=query.expected_hash,
            actual_hash=actual,
        )
