"""
EEU Complaints Proxy - Degraded-mode sample data.

When GAS cannot be reached (or answers with garbage) the dashboard's two
main read views still need something to render. ``FallbackProvider`` holds
a fixed snapshot of four complaints and four activities whose timestamps
are computed once, relative to when the provider was built, so repeated
calls return identical data.

Only the complaints list and activities list routes use it, and only for
reads.
"""

from __future__ import annotations

import copy
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from complaints_proxy.core.utils import iso_timestamp
from complaints_proxy.domain.enums import (
    ComplaintCategory,
    ComplaintPriority,
    ComplaintStatus,
)
from complaints_proxy.domain.models import Activity, Complaint
from complaints_proxy.domain.normalize import to_sheet_record


def _build_complaints(now: datetime) -> List[Complaint]:
    def ago(**kwargs: float) -> str:
        return iso_timestamp(now - timedelta(**kwargs))

    return [
        Complaint(
            id="cmp-001",
            ticketNumber="EEU-2025-001",
            customerId="cust-001",
            customerName="Abebe Kebede",
            customerPhone="+251911234567",
            customerEmail="abebe.k@email.com",
            category=ComplaintCategory.POWER_OUTAGE.value,
            priority=ComplaintPriority.HIGH.value,
            status=ComplaintStatus.IN_PROGRESS.value,
            title="Power outage in Bole area",
            description="No electricity for the past 6 hours in Bole sub-city, near Atlas area.",
            region="Addis Ababa",
            serviceCenter="Bole Service Center",
            assignedTo="staff-001",
            assignedToName="Addis Staff Member",
            createdAt=ago(hours=6),
            updatedAt=ago(hours=2),
        ),
        Complaint(
            id="cmp-002",
            ticketNumber="EEU-2025-002",
            customerId="cust-002",
            customerName="Tigist Alemu",
            customerPhone="+251922345678",
            category=ComplaintCategory.BILLING.value,
            priority=ComplaintPriority.MEDIUM.value,
            status=ComplaintStatus.OPEN.value,
            title="Incorrect billing amount",
            description="Monthly electricity bill appears unusually high and needs review.",
            region="Addis Ababa",
            serviceCenter="Bole Service Center",
            createdAt=ago(days=2),
            updatedAt=ago(days=2),
        ),
        Complaint(
            id="cmp-003",
            ticketNumber="EEU-2025-003",
            customerId="cust-003",
            customerName="Mulugeta Tesfaye",
            customerPhone="+251933456789",
            category=ComplaintCategory.METER.value,
            priority=ComplaintPriority.CRITICAL.value,
            status=ComplaintStatus.OPEN.value,
            title="Faulty electricity meter",
            description="Meter is emitting noise and showing incorrect readings.",
            region="Oromia",
            serviceCenter="Adama Service Center",
            createdAt=ago(days=1),
            updatedAt=ago(days=1),
        ),
        Complaint(
            id="cmp-004",
            ticketNumber="EEU-2025-004",
            customerId="cust-004",
            customerName="Hanna Bekele",
            customerPhone="+251944567890",
            customerEmail="hanna.b@email.com",
            category=ComplaintCategory.CONNECTION.value,
            priority=ComplaintPriority.LOW.value,
            status=ComplaintStatus.RESOLVED.value,
            title="New connection request",
            description="Request for new electricity connection for a residential property.",
            region="Addis Ababa",
            serviceCenter="Bole Service Center",
            assignedTo="staff-001",
            assignedToName="Addis Staff Member",
            createdAt=ago(days=7),
            updatedAt=ago(days=1),
            resolvedAt=ago(days=1),
        ),
    ]


def _build_activities(now: datetime) -> List[Activity]:
    def ago(minutes: int) -> str:
        return iso_timestamp(now - timedelta(minutes=minutes))

    return [
        Activity("act-001", "Complaint created", "System Administrator", ago(120), "EEU-2025-001"),
        Activity("act-002", "Complaint assigned", "Operations Manager", ago(90), "EEU-2025-002"),
        Activity("act-003", "Status updated", "Addis Staff Member", ago(45), "EEU-2025-003"),
        Activity("act-004", "Complaint resolved", "Customer Support", ago(15), "EEU-2025-004"),
    ]


class FallbackProvider:
    """Immutable sample data set, built once per process."""

    def __init__(self, now: Optional[datetime] = None) -> None:
        self.built_at = now or datetime.now(timezone.utc)
        self._complaints = [to_sheet_record(c) for c in _build_complaints(self.built_at)]
        self._activities = [a.to_dict() for a in _build_activities(self.built_at)]

    def complaints(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._complaints)

    def activities(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._activities)

    @staticmethod
    def envelope(data: List[Dict[str, Any]]) -> Dict[str, Any]:
        """The success body the frontend expects from GAS."""
        return {"success": True, "data": data}
