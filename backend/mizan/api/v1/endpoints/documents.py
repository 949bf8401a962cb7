"""
Unified document register endpoint
"""
from typing import List, Optional

from fastapi import APIRouter

from mizan.db.schemas import Case, Client, DocumentRegister, SnapshotModel
from mizan.services.document_service import category_counts, filter_documents, unify_documents

router = APIRouter()


class DocumentsRequest(SnapshotModel):
    cases:    List[Case]    = []
    clients:  List[Client]  = []
    search:   str           = ""
    category: Optional[str] = None
    source:   Optional[str] = None


@router.post("", response_model=DocumentRegister)
def get_documents(body: DocumentsRequest):
    """
    Every client and case document, newest first. Counts always cover the
    whole register, before filtering.
    """
    docs = unify_documents(body.cases, body.clients)
    return DocumentRegister(
        documents=filter_documents(docs, body.search, body.category, body.source),
        counts=category_counts(docs),
    )
