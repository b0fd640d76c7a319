"""
complaints_proxy.domain.normalize - Spreadsheet row <-> canonical record mapping.

GAS reads rows straight out of the sheet, so the same logical field can
arrive either under its camelCase name (``customerName``) or under the
sheet's column header (``Customer Name``). This module is the single place
that knows both spellings.

Lookups follow "first non-empty wins": an empty string under the camelCase
key does not hide a populated column header.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from complaints_proxy.domain.enums import (
    ComplaintCategory,
    ComplaintPriority,
    ComplaintStatus,
    UserRole,
    _Vocabulary,
)
from complaints_proxy.domain.models import Attachment, Complaint, User

logger = logging.getLogger(__name__)


# canonical key -> sheet column header
COMPLAINT_SHEET_COLUMNS: Dict[str, str] = {
    "id": "ID",
    "ticketNumber": "Ticket Number",
    "customerId": "Customer ID",
    "customerName": "Customer Name",
    "customerPhone": "Customer Phone",
    "customerEmail": "Customer Email",
    "category": "Category",
    "priority": "Priority",
    "status": "Status",
    "title": "Title",
    "description": "Description",
    "region": "Region",
    "serviceCenter": "Service Center",
    "assignedTo": "Assigned To",
    "assignedToName": "AssignedToName",
    "createdAt": "Created At",
    "updatedAt": "Updated At",
    "resolvedAt": "Resolved At",
    "notes": "Notes",
}

ATTACHMENT_SHEET_COLUMNS: Dict[str, str] = {
    "id": "ID",
    "file_name": "File Name",
    "file_path": "File Path",
    "file_size": "File Size",
    "file_type": "File Type",
    "created_at": "Uploaded At",
    "uploaded_by_name": "Uploaded By",
    "complaintId": "Complaint ID",
}

_TRUE_STRINGS = {"true", "yes", "1", "active", "y"}


def _pick(row: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = row.get(key)
        if value not in (None, ""):
            return value
    return default


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _vocab(value: Any, vocabulary: Type[_Vocabulary]) -> Optional[str]:
    """Map ``value`` onto ``vocabulary``; unknown values pass through untouched."""
    if value in (None, ""):
        return None
    member = vocabulary.parse(value)
    if member is None:
        logger.debug("Value %r is outside the %s vocabulary", value, vocabulary.__name__)
        return str(value)
    return member.value


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    return str(value).strip().lower() in _TRUE_STRINGS


def _as_size(value: Any) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


# ---------------------------------------------------------------------------
# Row -> canonical
# ---------------------------------------------------------------------------

def normalize_complaint(row: Mapping[str, Any], index: int = 0) -> Complaint:
    """Build a ``Complaint`` from a raw GAS row.

    Rows without any identifier get ``temp-<index>`` so list views still
    have a stable key.
    """
    def field(name: str) -> Any:
        return _pick(row, name, COMPLAINT_SHEET_COLUMNS[name])

    complaint_id = _pick(
        row, "id", "ID", "ticketNumber", "Ticket Number", default=f"temp-{index}"
    )
    return Complaint(
        id=_as_text(complaint_id),
        ticketNumber=_as_text(field("ticketNumber")),
        customerId=_as_text(field("customerId")),
        customerName=_as_text(field("customerName")),
        customerPhone=_as_text(field("customerPhone")),
        customerEmail=_as_text(field("customerEmail")),
        category=_vocab(field("category"), ComplaintCategory),
        priority=_vocab(field("priority"), ComplaintPriority),
        status=_vocab(field("status"), ComplaintStatus),
        title=_as_text(field("title")),
        description=_as_text(field("description")),
        region=_as_text(field("region")),
        serviceCenter=_as_text(field("serviceCenter")),
        assignedTo=_as_text(field("assignedTo")),
        assignedToName=_as_text(field("assignedToName") or "Unassigned"),
        createdAt=_as_text(field("createdAt")),
        updatedAt=_as_text(field("updatedAt")),
        resolvedAt=_as_text(field("resolvedAt")),
        notes=_as_text(field("notes")),
    )


def normalize_attachment(row: Mapping[str, Any], index: int = 0) -> Attachment:
    def field(name: str) -> Any:
        return _pick(row, name, ATTACHMENT_SHEET_COLUMNS[name])

    attachment_id = field("id")
    return Attachment(
        id=None if attachment_id is None else _as_text(attachment_id),
        file_name=field("file_name"),
        file_path=field("file_path"),
        file_size=_as_size(field("file_size")),
        file_type=field("file_type"),
        created_at=field("created_at"),
        uploaded_by_name=_as_text(field("uploaded_by_name") or "Unknown"),
        complaintId=field("complaintId"),
    )


def normalize_user(row: Mapping[str, Any], index: int = 0) -> User:
    email = _pick(row, "email", "Email")
    role = _vocab(_pick(row, "role", "Role"), UserRole) or UserRole.STAFF.value
    user_id = _pick(row, "id", "ID")
    return User(
        id=None if user_id is None else _as_text(user_id),
        email=email,
        name=_pick(row, "name", "Name", "full_name", "Full Name", default=email),
        role=role,
        region=_pick(row, "region", "Region"),
        serviceCenter=_pick(row, "serviceCenter", "Service Center"),
        active=_as_bool(_pick(row, "active", "Active", default=False)),
        createdAt=_pick(row, "createdAt", "Created At"),
    )


# ---------------------------------------------------------------------------
# Canonical -> sheet
# ---------------------------------------------------------------------------

def to_sheet_record(complaint: Complaint) -> Dict[str, Any]:
    """Return ``complaint`` with each populated field under both spellings.

    This is the shape GAS itself returns, so degraded-mode data looks like
    a real upstream row to the frontend.
    """
    record: Dict[str, Any] = {}
    for key, value in complaint.to_dict().items():
        if key != "id" and value in (None, ""):
            continue
        if key == "assignedToName" and not complaint.assignedTo:
            continue
        record[key] = value
        record[COMPLAINT_SHEET_COLUMNS[key]] = value
    return record


# ---------------------------------------------------------------------------
# Response bodies
# ---------------------------------------------------------------------------

_NORMALIZERS: Dict[str, Callable[[Mapping[str, Any], int], Any]] = {
    "complaint": normalize_complaint,
    "attachment": normalize_attachment,
    "user": normalize_user,
}


def normalize_body(body: Any, kind: str) -> Any:
    """Rewrite ``body["data"]`` of a GAS success envelope into canonical records.

    Bodies that are not a ``{"data": ...}`` object, and rows that are not
    objects, are returned unchanged.
    """
    normalizer = _NORMALIZERS[kind]
    if not isinstance(body, dict) or "data" not in body:
        return body

    data = body["data"]
    if isinstance(data, list):
        rows: List[Any] = [
            normalizer(row, i).to_dict() if isinstance(row, Mapping) else row
            for i, row in enumerate(data)
        ]
        return {**body, "data": rows}
    if isinstance(data, Mapping):
        return {**body, "data": normalizer(data, 0).to_dict()}
    return body
