"""
api/v1/endpoints/alerts.py

Notification feed for the application shell.

Endpoints:
  POST /api/v1/alerts: ranked alerts and sidebar badge counts for a snapshot
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter

from mizan.db.schemas import AlertFeed, Case, Client, Hearing, SnapshotModel
from mizan.services.notification_service import build_alert_feed

logger = logging.getLogger(__name__)

router = APIRouter()


class AlertsRequest(SnapshotModel):
    cases:    List[Case]         = []
    clients:  List[Client]       = []
    hearings: List[Hearing]      = []
    now:      Optional[datetime] = None


@router.post("", response_model=AlertFeed)
def get_alert_feed(body: AlertsRequest):
    """
    Evaluate every alert rule against the snapshot and return them ranked
    critical-first. ``now`` overrides the clock (start of that day is used).
    """
    return build_alert_feed(body.hearings, body.cases, body.clients, now=body.now)
