"""
complaints_proxy.domain.models - Canonical record shapes.

These are the shapes the frontend consumes once spreadsheet rows have been
normalized. ``complaints_proxy.domain.normalize`` is the only place that
builds them from raw GAS rows.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Complaint
# ---------------------------------------------------------------------------

@dataclass
class Complaint:
    id: str
    ticketNumber: str = ""
    customerId: str = ""
    customerName: str = ""
    customerPhone: str = ""
    customerEmail: str = ""
    category: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    title: str = ""
    description: str = ""
    region: str = ""
    serviceCenter: str = ""
    assignedTo: str = ""
    assignedToName: str = "Unassigned"
    createdAt: str = ""
    updatedAt: str = ""
    resolvedAt: str = ""
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Attachment
# ---------------------------------------------------------------------------

@dataclass
class Attachment:
    id: Optional[str]
    file_name: Optional[str] = None
    file_path: Optional[str] = None
    file_size: Optional[int] = None
    file_type: Optional[str] = None
    created_at: Optional[str] = None
    uploaded_by_name: str = "Unknown"
    complaintId: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------

@dataclass
class User:
    id: Optional[str]
    email: Optional[str] = None
    name: Optional[str] = None
    role: str = "staff"
    region: Optional[str] = None
    serviceCenter: Optional[str] = None
    active: bool = False
    createdAt: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Activity (recent-activity feed)
# ---------------------------------------------------------------------------

@dataclass
class Activity:
    id: str
    action: str
    userName: str
    createdAt: str
    ticketNumber: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
