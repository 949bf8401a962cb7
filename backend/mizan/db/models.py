"""
Domain enums shared by the snapshot schemas and the derivation services.

Entities themselves are owned by the external document store; this module
only names the closed value sets the core branches on.
"""
import enum


class HearingStatus(str, enum.Enum):
    """Hearing status; an absent status is treated as scheduled"""
    scheduled = "scheduled"
    completed = "completed"
    postponed = "postponed"
    cancelled = "cancelled"
    reserved_for_judgment = "reserved_for_judgment"


# Display labels the front end stores verbatim in older records
HEARING_STATUS_LABELS = {
    "محددة": HearingStatus.scheduled,
    "تمت": HearingStatus.completed,
    "مؤجلة": HearingStatus.postponed,
    "ملغاة": HearingStatus.cancelled,
    "حجز للحكم": HearingStatus.reserved_for_judgment,
}


class TransactionType(str, enum.Enum):
    """Ledger entry kind"""
    payment = "payment"
    expense = "expense"


class PaymentMethod(str, enum.Enum):
    cash = "cash"
    check = "check"
    instapay = "instapay"
    wallet = "wallet"
    bank_transfer = "bank_transfer"


class ExpensePayer(str, enum.Enum):
    """Who paid a hearing-level expense"""
    lawyer = "lawyer"
    client = "client"


class AlertType(str, enum.Enum):
    hearing = "hearing"
    poa_expiry = "poa_expiry"
    task = "task"


class AlertUrgency(str, enum.Enum):
    critical = "critical"
    high = "high"
    medium = "medium"
    low = "low"


# Lower rank is shown first.
URGENCY_RANK = {
    AlertUrgency.critical: 0,
    AlertUrgency.high: 1,
    AlertUrgency.medium: 2,
    AlertUrgency.low: 3,
}


class PaymentStatus(str, enum.Enum):
    """Collection state of a single case's agreed fees"""
    completed = "completed"
    partial = "partial"
    unpaid = "unpaid"


class PermissionLevel(str, enum.Enum):
    none = "none"
    read = "read"
    write = "write"


class DocumentCategory(str, enum.Enum):
    """Unified document register categories"""
    legal = "legal"
    admin = "admin"
    evidence = "evidence"
    ruling = "ruling"
    contract = "contract"
    other = "other"


class DocumentSource(str, enum.Enum):
    case = "case"
    client = "client"
