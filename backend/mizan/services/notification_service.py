"""
services/notification_service.py

Alert feed for the application shell's notification bell.

Called by:
  - api/v1/endpoints/alerts.py (POST /api/v1/alerts)

Rules, evaluated against "today" (start of the current local day):
  A. upcoming hearing reminder, only at lead times 0, 1, 3 and 7 days
  B. hearing date passed while still scheduled (outcome never recorded)
  C. hearing requirements still outstanding on or after the hearing day
  D. client power of attorney expired or expiring within the warning window

The reminder cadence in rule A is deliberately sparse: a hearing 2, 4, 5 or 6
days out produces no reminder.

Everything here is a pure function of the snapshot. Alerts are rebuilt on
every call and keyed by make_alert_id, so the same condition always yields
the same id.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional, Sequence

from mizan.core.config import settings
from mizan.db.models import (
    URGENCY_RANK,
    AlertType,
    AlertUrgency,
    HearingStatus,
)
from mizan.db.schemas import Alert, AlertFeed, Case, Client, Hearing
from mizan.utils.dates import days_between, parse_local_date, today
from mizan.utils.exceptions import MalformedDateError
from mizan.utils.helpers import index_by_id

logger = logging.getLogger(__name__)


# lead time (days) -> (urgency, title template, message)
UPCOMING_REMINDERS = {
    0: (AlertUrgency.critical, "Hearing today: {case}", "Review the file and prepare for the hearing"),
    1: (AlertUrgency.high, "Hearing tomorrow: {case}", "Reminder: the hearing is tomorrow. Are the documents ready?"),
    3: (AlertUrgency.medium, "Hearing in 3 days: {case}", "Upcoming hearing reminder"),
    7: (AlertUrgency.low, "Hearing in a week: {case}", "Early notice"),
}

_NO_REMINDER_STATUSES = (HearingStatus.completed, HearingStatus.cancelled)


def make_alert_id(
    source_type: str,
    source_id: str,
    rule_tag: str,
    offset: Optional[int] = None,
) -> str:
    """
    Deterministic composite key for an alert.

    The offset distinguishes alerts raised for the same record at different
    lead times, e.g. ``hearing-upcoming-h1-3``.
    """
    key = f"{source_type}-{rule_tag}-{source_id}"
    if offset is not None:
        key = f"{key}-{offset}"
    return key


def _client_name_for(case: Optional[Case], clients_by_id: dict) -> Optional[str]:
    if case is None:
        return None
    client = clients_by_id.get(case.client_id) if case.client_id else None
    if client is not None and client.name:
        return client.name
    return case.client_name


# ============================================================================
# Hearing rules
# ============================================================================

def _hearing_alerts(
    hearing: Hearing,
    day_start: datetime,
    cases_by_id: dict,
    clients_by_id: dict,
    unknown_case_label: str,
) -> list[Alert]:
    try:
        hearing_date = parse_local_date(hearing.date)
    except MalformedDateError:
        logger.debug("Skipping hearing %s: malformed date %r", hearing.id, hearing.date)
        return []

    diff_days = days_between(day_start, hearing_date)
    related_case = cases_by_id.get(hearing.case_id)
    case_title = related_case.title if related_case and related_case.title else unknown_case_label

    denormalized = {
        "case_number": related_case.case_number if related_case else None,
        "client_name": _client_name_for(related_case, clients_by_id),
        "case_id": hearing.case_id,
        "hearing_id": hearing.id,
    }
    court = related_case.court if related_case else None
    date_str = hearing_date.isoformat()
    alerts: list[Alert] = []

    # Rule A
    if diff_days >= 0 and hearing.status not in _NO_REMINDER_STATUSES:
        reminder = UPCOMING_REMINDERS.get(diff_days)
        if reminder is not None:
            urgency, title, message = reminder
            alerts.append(Alert(
                id=make_alert_id("hearing", hearing.id, "upcoming", diff_days),
                date=date_str,
                time=hearing.time,
                title=title.format(case=case_title),
                message=message,
                court=court,
                type=AlertType.hearing,
                urgency=urgency,
                **denormalized,
            ))

    # Rule B
    if diff_days < 0 and hearing.status in (None, HearingStatus.scheduled):
        alerts.append(Alert(
            id=make_alert_id("hearing", hearing.id, "overdue"),
            date=date_str,
            title=f"Hearing overdue: {case_title}",
            message="The hearing date has passed but no status or decision was recorded",
            court=court,
            type=AlertType.hearing,
            urgency=AlertUrgency.critical,
            **denormalized,
        ))

    # Rule C
    if (
        diff_days <= 0
        and hearing.requirements
        and not hearing.is_completed
        and hearing.status != HearingStatus.cancelled
    ):
        alerts.append(Alert(
            id=make_alert_id("hearing", hearing.id, "task"),
            date=date_str,
            title=f"Action required: {case_title}",
            message=f"Required: {hearing.requirements}",
            type=AlertType.task,
            urgency=AlertUrgency.high,
            **denormalized,
        ))

    return alerts


# ============================================================================
# Power of attorney rule
# ============================================================================

def _poa_alert(client: Client, day_start: datetime, warning_days: int) -> Optional[Alert]:
    if not client.poa_expiry:
        return None

    try:
        expiry = parse_local_date(client.poa_expiry)
    except MalformedDateError:
        logger.debug("Skipping client %s: malformed POA expiry %r", client.id, client.poa_expiry)
        return None

    days_left = days_between(day_start, expiry)

    if days_left < 0:
        return Alert(
            id=make_alert_id("client", client.id, "poa-expired"),
            date=expiry.isoformat(),
            title=f"Power of attorney expired: {client.name}",
            message="Renew the power of attorney immediately",
            client_name=client.name,
            client_id=client.id,
            type=AlertType.poa_expiry,
            urgency=AlertUrgency.critical,
        )

    if days_left <= warning_days:
        return Alert(
            id=make_alert_id("client", client.id, "poa-soon"),
            date=expiry.isoformat(),
            title=f"Power of attorney expiring soon: {client.name}",
            message=f"{days_left} days left until expiry",
            days_left=days_left,
            client_name=client.name,
            client_id=client.id,
            type=AlertType.poa_expiry,
            urgency=AlertUrgency.high,
        )

    return None


# ============================================================================
# Public API
# ============================================================================

def evaluate_alerts(
    hearings: Sequence[Hearing],
    cases: Sequence[Case],
    clients: Sequence[Client],
    now: Optional[datetime] = None,
    warning_days: Optional[int] = None,
) -> list[Alert]:
    """
    Produce every alert for the current day, in traversal order
    (hearings first, then clients). Use rank_alerts for display order.
    """
    day_start = today(settings.OFFICE_TIMEZONE, now=now)
    if warning_days is None:
        warning_days = settings.POA_WARNING_DAYS

    cases_by_id = index_by_id(cases)
    clients_by_id = index_by_id(clients)

    alerts: list[Alert] = []
    for hearing in hearings:
        if not hearing.date:
            continue
        alerts.extend(_hearing_alerts(
            hearing, day_start, cases_by_id, clients_by_id, settings.UNKNOWN_CASE_LABEL,
        ))

    for client in clients:
        alert = _poa_alert(client, day_start, warning_days)
        if alert is not None:
            alerts.append(alert)

    return alerts


def rank_alerts(alerts: Iterable[Alert]) -> list[Alert]:
    """Stable order: urgency first (critical → low), then earliest date."""
    return sorted(
        alerts,
        key=lambda a: (URGENCY_RANK[a.urgency], parse_local_date(a.date)),
    )


def badge_counts(alerts: Iterable[Alert]) -> dict[str, int]:
    """Sidebar badge counts. Only critical and high alerts are counted."""
    counts = {"hearings": 0, "clients": 0}
    for alert in alerts:
        if alert.urgency not in (AlertUrgency.critical, AlertUrgency.high):
            continue
        if alert.type == AlertType.hearing:
            counts["hearings"] += 1
        elif alert.type == AlertType.poa_expiry:
            counts["clients"] += 1
    return counts


def build_alert_feed(
    hearings: Sequence[Hearing],
    cases: Sequence[Case],
    clients: Sequence[Client],
    now: Optional[datetime] = None,
) -> AlertFeed:
    alerts = rank_alerts(evaluate_alerts(hearings, cases, clients, now=now))
    logger.info(
        "Alert feed built: %d alerts (hearings=%d, clients=%d)",
        len(alerts), len(hearings), len(clients),
    )
    return AlertFeed(alerts=alerts, badges=badge_counts(alerts))
