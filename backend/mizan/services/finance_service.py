"""
services/finance_service.py

Fee and expense figures for the billing views.

Called by:
  - api/v1/endpoints/finance.py

The summary cards trust each case's stored running totals
(finance.paid_amount / finance.expenses). The ledger history is only
re-derived for the per-case detail view and never used to recompute those
totals. Missing finance records and missing amounts count as zero.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Sequence

from mizan.core.config import settings
from mizan.db.models import ExpensePayer, PaymentMethod, PaymentStatus, TransactionType
from mizan.db.schemas import (
    Case,
    CaseFinancials,
    CaseLedger,
    Client,
    ExpenseLine,
    FinancialSummary,
    Hearing,
    LedgerEntry,
)
from mizan.utils.dates import date_sort_key
from mizan.utils.helpers import index_by_id

logger = logging.getLogger(__name__)

STATUS_FILTERS = ("all", "completed", "pending", "debt")

# hearing expense payer -> register label; anything not paid by the lawyer
# is shown as the client's
PAYER_LABELS = {
    ExpensePayer.lawyer: "office",
    ExpensePayer.client: "client",
    None: "client",
}


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def payment_status(agreed: float, paid: float) -> PaymentStatus:
    # completed is checked first; the agreed > 0 guard keeps 0/0 out of it
    if agreed > 0 and paid >= agreed:
        return PaymentStatus.completed
    if paid == 0:
        return PaymentStatus.unpaid
    return PaymentStatus.partial


def _client_name(case: Case, clients_by_id: dict) -> str:
    client = clients_by_id.get(case.client_id) if case.client_id else None
    if client is not None and client.name:
        return client.name
    return case.client_name or settings.UNKNOWN_CLIENT_LABEL


# ============================================================================
# Per-case view
# ============================================================================

def case_financials(case: Case, clients: Iterable[Client] = ()) -> CaseFinancials:
    clients_by_id = index_by_id(clients)
    finance = case.finance_or_default
    agreed = finance.agreed_fees
    paid = finance.paid_amount

    return CaseFinancials(
        case_id=case.id,
        title=case.title,
        case_number=case.case_number,
        client_id=case.client_id,
        client_name=_client_name(case, clients_by_id),
        agreed=agreed,
        paid=paid,
        remaining=agreed - paid,
        percentage=(paid / agreed) * 100 if agreed > 0 else 0,
        status=payment_status(agreed, paid),
    )


def list_case_financials(
    cases: Sequence[Case],
    clients: Sequence[Client] = (),
) -> list[CaseFinancials]:
    return [case_financials(c, clients) for c in cases]


def filter_case_financials(
    items: Iterable[CaseFinancials],
    search: str = "",
    status: str = "all",
) -> list[CaseFinancials]:
    """
    Billing list filter.

    ``search`` matches title, client name or case number (substring).
    ``status``: all | completed | pending (anything not completed) |
    debt (remaining > 0).
    """
    if status not in STATUS_FILTERS:
        raise ValueError(f"Unknown status filter: {status}")

    out: list[CaseFinancials] = []
    for item in items:
        if search and not (
            search in item.title
            or search in item.client_name
            or search in item.case_number
        ):
            continue
        if status == "completed" and item.status != PaymentStatus.completed:
            continue
        if status == "pending" and item.status == PaymentStatus.completed:
            continue
        if status == "debt" and not item.remaining > 0:
            continue
        out.append(item)
    return out


def classify_ledger(case: Case) -> CaseLedger:
    """
    Split the case history into payments and expenses, newest first.

    Totals on the returned view are the stored running totals, not sums of
    the history.
    """
    finance = case.finance_or_default
    payments = [t for t in finance.history if t.type == TransactionType.payment]
    expenses = [t for t in finance.history if t.type == TransactionType.expense]

    # reverse=True keeps same-day entries in recorded order
    payments.sort(key=lambda t: date_sort_key(t.date), reverse=True)
    expenses.sort(key=lambda t: date_sort_key(t.date), reverse=True)

    return CaseLedger(
        case_id=case.id,
        title=case.title,
        case_number=case.case_number,
        agreed=finance.agreed_fees,
        total_paid=finance.paid_amount,
        total_expenses=finance.expenses,
        net_income=finance.paid_amount - finance.expenses,
        remaining=finance.agreed_fees - finance.paid_amount,
        payments=payments,
        expenses=expenses,
    )


# ============================================================================
# Portfolio
# ============================================================================

def portfolio_summary(
    cases: Sequence[Case],
    hearings: Sequence[Hearing] = (),
) -> FinancialSummary:
    total_agreed = 0.0
    total_collected = 0.0
    total_case_expenses = 0.0
    total_hearing_expenses = 0.0

    for case in cases:
        finance = case.finance_or_default
        total_agreed += finance.agreed_fees
        total_collected += finance.paid_amount
        total_case_expenses += finance.expenses

    # Client-paid hearing costs are not the office's outflow.
    for hearing in hearings:
        if hearing.expenses and hearing.expenses.paid_by == ExpensePayer.lawyer:
            total_hearing_expenses += hearing.expenses.amount

    total_expenses = total_case_expenses + total_hearing_expenses
    collection_rate = (
        _round_half_up(total_collected / total_agreed * 100) if total_agreed > 0 else 0
    )

    return FinancialSummary(
        total_agreed=total_agreed,
        total_collected=total_collected,
        total_case_expenses=total_case_expenses,
        total_hearing_expenses=total_hearing_expenses,
        total_expenses=total_expenses,
        total_pending=total_agreed - total_collected,
        net_income=total_collected - total_expenses,
        collection_rate=collection_rate,
    )


def expense_register(
    cases: Sequence[Case],
    hearings: Sequence[Hearing] = (),
    clients: Sequence[Client] = (),
) -> list[ExpenseLine]:
    """Hearing expenses and case ledger expenses in one list, newest first."""
    cases_by_id = index_by_id(cases)
    clients_by_id = index_by_id(clients)

    def client_name_of(case: Optional[Case]) -> Optional[str]:
        if case is None or not case.client_id:
            return None
        client = clients_by_id.get(case.client_id)
        return client.name if client else None

    lines: list[ExpenseLine] = []

    for hearing in hearings:
        if not hearing.expenses or hearing.expenses.amount <= 0:
            continue
        case = cases_by_id.get(hearing.case_id)
        lines.append(ExpenseLine(
            id=f"h-{hearing.id}",
            date=hearing.date or "",
            category="Hearing expenses",
            description=hearing.expenses.description or "Miscellaneous expenses",
            amount=hearing.expenses.amount,
            case_id=hearing.case_id,
            case_title=case.title if case else None,
            client_name=client_name_of(case),
            paid_by=PAYER_LABELS[hearing.expenses.paid_by],
        ))

    for case in cases:
        for entry in case.finance_or_default.history:
            if entry.type != TransactionType.expense:
                continue
            lines.append(ExpenseLine(
                id=entry.id,
                date=entry.date,
                category=entry.category or "Administrative",
                description=entry.description or "Expenses",
                amount=entry.amount,
                case_id=case.id,
                case_title=case.title,
                client_name=client_name_of(case),
                paid_by="office",
            ))

    lines.sort(key=lambda line: date_sort_key(line.date), reverse=True)
    return lines


# ============================================================================
# Recording
# ============================================================================

def record_transaction(case: Case, entry: LedgerEntry) -> Case:
    """
    Return a copy of ``case`` with ``entry`` appended to its ledger and the
    matching running total increased. ``case`` itself is left untouched;
    persisting the result is the caller's job.
    """
    if entry.type == TransactionType.payment:
        entry = entry.model_copy(update={"method": entry.method or PaymentMethod.cash, "category": None})
    else:
        entry = entry.model_copy(update={"category": entry.category or "Miscellaneous", "method": None})

    finance = case.finance_or_default
    update = {"history": [*finance.history, entry]}
    if entry.type == TransactionType.payment:
        update["paid_amount"] = finance.paid_amount + entry.amount
    else:
        update["expenses"] = finance.expenses + entry.amount

    new_finance = finance.model_copy(update=update)
    logger.info(
        "Recorded %s of %.2f on case %s",
        entry.type.value, entry.amount, case.id,
    )
    return case.model_copy(update={"finance": new_finance})
