"""
services/document_service.py

One document register across clients and cases, for the Documents page.

Sources, in traversal order:
  - client documents and legacy client POA files
  - case documents, case rulings that carry a file, case memos that carry a file

Each row gets a composite unique_key built from its source so two documents
sharing an id under different owners stay distinct.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from mizan.db.models import DocumentCategory, DocumentSource
from mizan.db.schemas import Case, Client, UnifiedDocument
from mizan.utils.dates import date_sort_key
from mizan.utils.helpers import contains_text

logger = logging.getLogger(__name__)


# client document type -> (category, label)
CLIENT_DOCUMENT_CATEGORIES = {
    "national_id": (DocumentCategory.admin, "Identity documents"),
    "commercial_register": (DocumentCategory.admin, "Identity documents"),
    "tax_card": (DocumentCategory.admin, "Identity documents"),
    "poa": (DocumentCategory.legal, "Powers of attorney"),
    "contract": (DocumentCategory.contract, "Contracts"),
}
CLIENT_DOCUMENT_DEFAULT = (DocumentCategory.other, "General documents")

# case document category -> (category, label)
CASE_DOCUMENT_CATEGORIES = {
    "contract": (DocumentCategory.contract, "Contracts"),
    "ruling": (DocumentCategory.ruling, "Rulings"),
    "notice": (DocumentCategory.legal, "Notices and warnings"),
    "minutes": (DocumentCategory.evidence, "Minutes"),
}
CASE_DOCUMENT_DEFAULT = (DocumentCategory.other, "Case documents")


def _client_documents(client: Client) -> list[UnifiedDocument]:
    docs: list[UnifiedDocument] = []

    for d in client.documents:
        category, label = CLIENT_DOCUMENT_CATEGORIES.get(d.type, CLIENT_DOCUMENT_DEFAULT)
        docs.append(UnifiedDocument(
            id=d.id,
            unique_key=f"client-{client.id}-{d.id}",
            title=d.name,
            type="file",
            category=category,
            category_label=label,
            date=d.upload_date,
            url=d.url,
            source_type=DocumentSource.client,
            source_id=client.id,
            source_name=client.name,
        ))

    for p in client.poa_files:
        docs.append(UnifiedDocument(
            id=p.id,
            unique_key=f"client-poa-{client.id}-{p.id}",
            title=p.name,
            type="pdf",
            category=DocumentCategory.legal,
            category_label="Powers of attorney",
            date=p.upload_date,
            url=p.url,
            source_type=DocumentSource.client,
            source_id=client.id,
            source_name=client.name,
        ))

    return docs


def _case_documents(case: Case) -> list[UnifiedDocument]:
    docs: list[UnifiedDocument] = []

    for d in case.documents:
        category, label = CASE_DOCUMENT_CATEGORIES.get(d.category, CASE_DOCUMENT_DEFAULT)
        docs.append(UnifiedDocument(
            id=d.id,
            unique_key=f"case-{case.id}-{d.id}",
            title=d.name,
            type=d.type,
            category=category,
            category_label=label,
            date=d.upload_date,
            url=d.url,
            source_type=DocumentSource.case,
            source_id=case.id,
            source_name=case.title,
            is_original=d.is_original,
        ))

    for r in case.rulings:
        if not r.url:
            continue
        docs.append(UnifiedDocument(
            id=r.id,
            unique_key=f"case-ruling-{case.id}-{r.id}",
            title=r.document_name or f"Ruling file: {r.summary[:20]}...",
            type="pdf",
            category=DocumentCategory.ruling,
            category_label="Court rulings",
            date=r.date,
            url=r.url,
            source_type=DocumentSource.case,
            source_id=case.id,
            source_name=case.title,
            is_original=True,
        ))

    for m in case.memos:
        if not m.url:
            continue
        docs.append(UnifiedDocument(
            id=m.id,
            unique_key=f"case-memo-{case.id}-{m.id}",
            title=f"Memo: {m.title}",
            type="pdf",
            category=DocumentCategory.legal,
            category_label="Defense memos",
            date=m.submission_date,
            url=m.url,
            source_type=DocumentSource.case,
            source_id=case.id,
            source_name=case.title,
        ))

    return docs


def unify_documents(
    cases: Sequence[Case],
    clients: Sequence[Client],
) -> list[UnifiedDocument]:
    """All client and case documents, newest first."""
    docs: list[UnifiedDocument] = []
    for client in clients:
        docs.extend(_client_documents(client))
    for case in cases:
        docs.extend(_case_documents(case))

    docs.sort(key=lambda d: date_sort_key(d.date), reverse=True)
    logger.debug("Document register: %d documents from %d clients, %d cases", len(docs), len(clients), len(cases))
    return docs


def filter_documents(
    docs: Iterable[UnifiedDocument],
    search: str = "",
    category: Optional[str] = None,
    source: Optional[str] = None,
) -> list[UnifiedDocument]:
    """
    Filter the register. ``search`` is a case-insensitive match on title or
    source name; ``category`` and ``source`` accept "all" or None for no filter.
    """
    out: list[UnifiedDocument] = []
    for doc in docs:
        if search and not (contains_text(doc.title, search) or contains_text(doc.source_name, search)):
            continue
        if category not in (None, "all") and doc.category.value != category:
            continue
        if source not in (None, "all") and doc.source_type.value != source:
            continue
        out.append(doc)
    return out


def category_counts(docs: Sequence[UnifiedDocument]) -> dict[str, int]:
    counts = {"all": len(docs)}
    for category in DocumentCategory:
        counts[category.value] = 0
    for doc in docs:
        counts[doc.category.value] += 1
    return counts
