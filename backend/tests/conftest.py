from datetime import datetime, timedelta

import pytest

from mizan.db.schemas import Case, CaseFinance, Client, Hearing

# Mid-afternoon, so day flooring is exercised on every evaluation.
NOW = datetime(2024, 6, 10, 14, 30)
TODAY = NOW.date()


def day(offset: int) -> str:
    """ISO date ``offset`` days from TODAY."""
    return (TODAY + timedelta(days=offset)).isoformat()


def make_case(case_id="c1", title="Smith v. Jones", client_id="cl1", finance=None, **kwargs) -> Case:
    return Case(
        id=case_id,
        title=title,
        case_number=kwargs.pop("case_number", f"{case_id.upper()}/2024"),
        client_id=client_id,
        court=kwargs.pop("court", "Cairo Civil Court"),
        finance=finance,
        **kwargs,
    )


def make_finance(agreed=0, paid=0, expenses=0, history=None) -> CaseFinance:
    return CaseFinance(
        agreed_fees=agreed,
        paid_amount=paid,
        expenses=expenses,
        history=history or [],
    )


def make_hearing(hearing_id="h1", case_id="c1", offset=0, **kwargs) -> Hearing:
    return Hearing(id=hearing_id, case_id=case_id, date=day(offset), **kwargs)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def cases():
    return [make_case()]


@pytest.fixture
def clients():
    return [Client(id="cl1", name="Ahmed Hassan")]
