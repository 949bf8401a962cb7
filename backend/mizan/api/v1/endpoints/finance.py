"""
api/v1/endpoints/finance.py

Fees & expenses figures for the billing pages.

Endpoints:
  POST /api/v1/finance/summary: portfolio totals
  POST /api/v1/finance/cases: per-case list (search / status filter)
  POST /api/v1/finance/cases/{case_id}/ledger: payments / expenses breakdown
  POST /api/v1/finance/cases/{case_id}/transactions: case with a new ledger entry applied
  POST /api/v1/finance/expenses: combined expense register
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter
from pydantic import Field

from mizan.db.schemas import (
    Case,
    CaseFinancials,
    CaseLedger,
    Client,
    ExpenseLine,
    FinanceVisibility,
    FinancialSummary,
    Hearing,
    LedgerEntry,
    Permission,
    SnapshotModel,
)
from mizan.services.finance_service import (
    classify_ledger,
    expense_register,
    filter_case_financials,
    list_case_financials,
    portfolio_summary,
    record_transaction,
)
from mizan.services.permission_service import finance_visibility
from mizan.utils.exceptions import CaseNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Request / Response schemas
# ============================================================================

class SummaryRequest(SnapshotModel):
    cases:       List[Case]                 = []
    hearings:    List[Hearing]              = []
    permissions: Optional[List[Permission]] = None


class SummaryResponse(SnapshotModel):
    summary:    FinancialSummary
    visibility: Optional[FinanceVisibility] = None


class CaseListRequest(SnapshotModel):
    cases:   List[Case]   = []
    clients: List[Client] = []
    search:  str          = ""
    status:  str          = Field(default="all", pattern="^(all|completed|pending|debt)$")


class CaseSnapshotRequest(SnapshotModel):
    cases: List[Case] = []


class TransactionRequest(SnapshotModel):
    cases: List[Case] = []
    entry: LedgerEntry


class ExpensesRequest(SnapshotModel):
    cases:    List[Case]    = []
    hearings: List[Hearing] = []
    clients:  List[Client]  = []


def _find_case(cases: List[Case], case_id: str) -> Case:
    for case in cases:
        if case.id == case_id:
            return case
    raise CaseNotFoundError(case_id)


# ============================================================================
# Endpoints
# ============================================================================

@router.post("/summary", response_model=SummaryResponse)
def get_summary(body: SummaryRequest):
    summary = portfolio_summary(body.cases, body.hearings)
    visibility = None
    if body.permissions is not None:
        visibility = finance_visibility(body.permissions)
    return SummaryResponse(summary=summary, visibility=visibility)


@router.post("/cases", response_model=List[CaseFinancials])
def get_case_financials(body: CaseListRequest):
    items = list_case_financials(body.cases, body.clients)
    return filter_case_financials(items, search=body.search, status=body.status)


@router.post("/cases/{case_id}/ledger", response_model=CaseLedger)
def get_case_ledger(case_id: str, body: CaseSnapshotRequest):
    return classify_ledger(_find_case(body.cases, case_id))


@router.post("/cases/{case_id}/transactions", response_model=Case)
def add_transaction(case_id: str, body: TransactionRequest):
    """
    Returns the case with the entry appended and its running total updated.
    The caller persists the returned case.
    """
    case = _find_case(body.cases, case_id)
    return record_transaction(case, body.entry)


@router.post("/expenses", response_model=List[ExpenseLine])
def get_expenses(body: ExpensesRequest):
    return expense_register(body.cases, body.hearings, body.clients)
