"""
complaints_proxy.domain.enums - Fixed vocabularies shared with the frontend.

Keep this module import-clean (stdlib only).
"""

from enum import Enum
from typing import Optional


class _Vocabulary(str, Enum):
    @classmethod
    def parse(cls, value: object) -> Optional["_Vocabulary"]:
        """Return the member matching ``value`` (case-insensitive), else None."""
        if value is None:
            return None
        text = str(value).strip().lower().replace(" ", "_").replace("-", "_")
        for member in cls:
            if member.value == text:
                return member
        return None


# ---------------------------------------------------------------------------
# Complaints
# ---------------------------------------------------------------------------

class ComplaintStatus(_Vocabulary):
    OPEN        = "open"
    IN_PROGRESS = "in_progress"
    PENDING     = "pending"
    RESOLVED    = "resolved"
    CLOSED      = "closed"


class ComplaintPriority(_Vocabulary):
    LOW      = "low"
    MEDIUM   = "medium"
    HIGH     = "high"
    CRITICAL = "critical"


class ComplaintCategory(_Vocabulary):
    POWER_OUTAGE = "power_outage"
    BILLING      = "billing"
    CONNECTION   = "connection"
    METER        = "meter"
    MAINTENANCE  = "maintenance"
    OTHER        = "other"


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class UserRole(_Vocabulary):
    """Drives what the UI shows; the proxy never enforces it."""
    ADMIN      = "admin"
    MANAGER    = "manager"
    STAFF      = "staff"
    TECHNICIAN = "technician"
    CUSTOMER   = "customer"
