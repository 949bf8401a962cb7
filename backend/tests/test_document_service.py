import pytest

from mizan.db.models import DocumentCategory, DocumentSource
from mizan.db.schemas import CaseDocument, CaseMemo, CaseRuling, Client, ClientDocument
from mizan.services.document_service import category_counts, filter_documents, unify_documents

from conftest import make_case


@pytest.fixture
def register():
    clients = [
        Client(
            id="cl1",
            name="Ahmed Hassan",
            documents=[
                ClientDocument(id="d1", type="national_id", name="National ID", upload_date="2024-01-10"),
                ClientDocument(id="d2", type="misc", name="Letter", upload_date="2024-03-02"),
            ],
            poa_files=[ClientDocument(id="p1", type="poa", name="POA 2023", upload_date="2023-12-01")],
        ),
    ]
    cases = [
        make_case(
            documents=[
                CaseDocument(id="d1", name="Lease contract", type="pdf", category="contract",
                             upload_date="2024-02-15", is_original=True),
            ],
            rulings=[
                CaseRuling(id="r1", date="2024-05-20", summary="First instance ruling in favour", url="s3://r1"),
                CaseRuling(id="r2", date="2024-05-21", summary="No file"),
            ],
            memos=[
                CaseMemo(id="m1", title="Defense memo", submission_date="2024-04-01", url="s3://m1"),
                CaseMemo(id="m2", title="Draft", submission_date="2024-04-02"),
            ],
        ),
    ]
    return unify_documents(cases, clients)


def test_unique_keys_distinguish_shared_ids(register):
    keys = [d.unique_key for d in register]

    assert "client-cl1-d1" in keys
    assert "case-c1-d1" in keys
    assert len(keys) == len(set(keys))


def test_newest_first(register):
    dates = [d.date for d in register]
    assert dates == sorted(dates, reverse=True)


def test_rulings_and_memos_without_file_skipped(register):
    keys = {d.unique_key for d in register}

    assert "case-ruling-c1-r1" in keys
    assert "case-ruling-c1-r2" not in keys
    assert "case-memo-c1-m1" in keys
    assert "case-memo-c1-m2" not in keys


def test_categorisation(register):
    by_key = {d.unique_key: d for d in register}

    assert by_key["client-cl1-d1"].category == DocumentCategory.admin
    assert by_key["client-cl1-d2"].category == DocumentCategory.other
    assert by_key["client-poa-cl1-p1"].category == DocumentCategory.legal
    assert by_key["case-c1-d1"].category == DocumentCategory.contract
    assert by_key["case-ruling-c1-r1"].category == DocumentCategory.ruling
    assert by_key["case-memo-c1-m1"].category == DocumentCategory.legal


def test_ruling_title_falls_back_to_summary(register):
    ruling = next(d for d in register if d.unique_key == "case-ruling-c1-r1")

    assert ruling.title == "Ruling file: First instance rulin..."
    assert ruling.is_original is True


def test_sources(register):
    by_key = {d.unique_key: d for d in register}

    assert by_key["client-cl1-d1"].source_type == DocumentSource.client
    assert by_key["client-cl1-d1"].source_name == "Ahmed Hassan"
    assert by_key["case-memo-c1-m1"].source_type == DocumentSource.case
    assert by_key["case-memo-c1-m1"].source_name == "Smith v. Jones"


def test_filter_by_search_is_case_insensitive(register):
    assert [d.unique_key for d in filter_documents(register, search="lease")] == ["case-c1-d1"]
    assert len(filter_documents(register, search="ahmed")) == 3


def test_filter_by_category_and_source(register):
    legal = filter_documents(register, category="legal")
    assert {d.unique_key for d in legal} == {"client-poa-cl1-p1", "case-memo-c1-m1"}

    from_cases = filter_documents(register, source="case")
    assert all(d.source_type == DocumentSource.case for d in from_cases)
    assert len(from_cases) == 3

    assert filter_documents(register, category="all", source="all") == register


def test_category_counts(register):
    counts = category_counts(register)

    assert counts["all"] == 6
    assert counts["legal"] == 2
    assert counts["evidence"] == 0
    assert sum(v for k, v in counts.items() if k != "all") == counts["all"]


def test_empty_register():
    assert unify_documents([], []) == []
    assert category_counts([])["all"] == 0


def test_unpadded_upload_dates_sort_as_calendar_days():
    client = Client(
        id="cl1",
        name="Ahmed Hassan",
        documents=[
            ClientDocument(id="d1", type="misc", name="Older", upload_date="2024-6-5"),
            ClientDocument(id="d2", type="misc", name="Newer", upload_date="2024-06-10"),
        ],
    )

    assert [d.id for d in unify_documents([], [client])] == ["d2", "d1"]
