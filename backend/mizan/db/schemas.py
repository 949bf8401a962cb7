"""
Pydantic validation schemas

Snapshots arrive from the front end in camelCase (``agreedFees``,
``poaExpiry``); attributes are snake_case and either spelling is accepted.
"""
from typing import Optional, List, Dict

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from mizan.db.models import (
    AlertType,
    AlertUrgency,
    DocumentCategory,
    DocumentSource,
    ExpensePayer,
    HEARING_STATUS_LABELS,
    HearingStatus,
    PaymentMethod,
    PaymentStatus,
    PermissionLevel,
    TransactionType,
)


class SnapshotModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _none_to_zero(v):
    return 0 if v is None else v


def _lenient_enum(enum_cls, v, labels=None):
    """Enum member for ``v``; unrecognised values become None instead of failing the snapshot"""
    if v is None or isinstance(v, enum_cls):
        return v
    if not isinstance(v, str):
        return None
    v = v.strip()
    if labels and v in labels:
        return labels[v]
    try:
        return enum_cls(v)
    except ValueError:
        return None


# ============================================================================
# Finance Schemas
# ============================================================================

class LedgerEntry(SnapshotModel):
    """A single recorded payment or expense on a case"""
    id: str
    date: str
    amount: float = Field(default=0, ge=0)
    type: TransactionType
    method: Optional[PaymentMethod] = None
    category: Optional[str] = None
    description: Optional[str] = None
    recorded_by: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def amount_default(cls, v):
        return _none_to_zero(v)


class CaseFinance(SnapshotModel):
    agreed_fees: float = 0
    paid_amount: float = 0
    expenses: float = 0
    history: List[LedgerEntry] = Field(default_factory=list)

    @field_validator("agreed_fees", "paid_amount", "expenses", mode="before")
    @classmethod
    def totals_default(cls, v):
        return _none_to_zero(v)

    @field_validator("history", mode="before")
    @classmethod
    def history_default(cls, v):
        return [] if v is None else v


# ============================================================================
# Case Schemas
# ============================================================================

class CaseDocument(SnapshotModel):
    id: str
    name: str
    type: str = "other"
    category: str = "other"
    url: Optional[str] = None
    upload_date: str = ""
    is_original: Optional[bool] = None


class CaseRuling(SnapshotModel):
    id: str
    date: str
    summary: str = ""
    document_name: Optional[str] = None
    url: Optional[str] = None


class CaseMemo(SnapshotModel):
    id: str
    title: str
    type: str = "other"
    submission_date: str = ""
    url: Optional[str] = None


class Case(SnapshotModel):
    id: str
    title: str = ""
    case_number: str = ""
    client_id: Optional[str] = None
    client_name: Optional[str] = None
    court: Optional[str] = None
    status: Optional[str] = None
    finance: Optional[CaseFinance] = None
    documents: List[CaseDocument] = Field(default_factory=list)
    rulings: List[CaseRuling] = Field(default_factory=list)
    memos: List[CaseMemo] = Field(default_factory=list)

    @property
    def finance_or_default(self) -> CaseFinance:
        """Stored finance record, or a zeroed one when the case has none"""
        if self.finance is None:
            return CaseFinance()
        return self.finance


# ============================================================================
# Client Schemas
# ============================================================================

class ClientDocument(SnapshotModel):
    id: str
    type: str = "other"
    name: str
    url: Optional[str] = None
    upload_date: str = ""
    expiry_date: Optional[str] = None


class Client(SnapshotModel):
    id: str
    name: str = ""
    poa_expiry: Optional[str] = None
    documents: List[ClientDocument] = Field(default_factory=list)
    poa_files: List[ClientDocument] = Field(default_factory=list)


# ============================================================================
# Hearing Schemas
# ============================================================================

class HearingExpenses(SnapshotModel):
    amount: float = 0
    description: Optional[str] = None
    # only "lawyer" counts as an office expense
    paid_by: Optional[ExpensePayer] = None

    @field_validator("amount", mode="before")
    @classmethod
    def amount_default(cls, v):
        return _none_to_zero(v)

    @field_validator("paid_by", mode="before")
    @classmethod
    def paid_by_lenient(cls, v):
        return _lenient_enum(ExpensePayer, v)


class Hearing(SnapshotModel):
    id: str
    case_id: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    status: Optional[HearingStatus] = None
    requirements: Optional[str] = None
    is_completed: Optional[bool] = None
    expenses: Optional[HearingExpenses] = None

    @field_validator("status", mode="before")
    @classmethod
    def status_lenient(cls, v):
        return _lenient_enum(HearingStatus, v, HEARING_STATUS_LABELS)


# ============================================================================
# Alert Schemas
# ============================================================================

class Alert(SnapshotModel):
    id: str
    date: str
    time: Optional[str] = None
    title: str
    message: Optional[str] = None
    case_number: Optional[str] = None
    client_name: Optional[str] = None
    court: Optional[str] = None
    case_id: Optional[str] = None
    client_id: Optional[str] = None
    hearing_id: Optional[str] = None
    type: AlertType
    urgency: AlertUrgency
    days_left: Optional[int] = None

    @computed_field
    @property
    def target_page(self) -> str:
        """Detail view a click on this alert opens"""
        if self.type == AlertType.poa_expiry:
            return "client-details"
        return "case-details"

    @computed_field
    @property
    def target_id(self) -> Optional[str]:
        if self.type == AlertType.poa_expiry:
            return self.client_id
        return self.case_id


class AlertFeed(SnapshotModel):
    alerts: List[Alert]
    badges: Dict[str, int]


# ============================================================================
# Financial Views
# ============================================================================

class CaseFinancials(SnapshotModel):
    case_id: str
    title: str
    case_number: str
    client_id: Optional[str] = None
    client_name: str
    agreed: float
    paid: float
    remaining: float
    percentage: float
    status: PaymentStatus


class FinancialSummary(SnapshotModel):
    total_agreed: float
    total_collected: float
    total_case_expenses: float
    total_hearing_expenses: float
    total_expenses: float
    total_pending: float
    net_income: float
    collection_rate: int


class CaseLedger(SnapshotModel):
    case_id: str
    title: str
    case_number: str
    agreed: float
    total_paid: float
    total_expenses: float
    net_income: float
    remaining: float
    payments: List[LedgerEntry]
    expenses: List[LedgerEntry]


class ExpenseLine(SnapshotModel):
    id: str
    date: str
    category: str
    description: str
    amount: float
    case_id: Optional[str] = None
    case_title: Optional[str] = None
    client_name: Optional[str] = None
    paid_by: str


# ============================================================================
# Permission Schemas
# ============================================================================

class Permission(SnapshotModel):
    module_id: str
    access: PermissionLevel = PermissionLevel.none


class ModuleAccess(SnapshotModel):
    module_id: str
    access: PermissionLevel
    visible: bool
    read_only: bool


class FinanceVisibility(SnapshotModel):
    can_view_income: bool
    can_view_expenses: bool
    read_only: bool


# ============================================================================
# Document Register
# ============================================================================

class UnifiedDocument(SnapshotModel):
    id: str
    unique_key: str
    title: str
    type: str
    category: DocumentCategory
    category_label: str
    date: str
    url: Optional[str] = None
    source_type: DocumentSource
    source_id: str
    source_name: str
    is_original: Optional[bool] = None


class DocumentRegister(SnapshotModel):
    documents: List[UnifiedDocument]
    counts: Dict[str, int]
