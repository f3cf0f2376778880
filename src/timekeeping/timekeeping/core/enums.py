from __future__ import annotations

from enum import Enum


class PunchType(str, Enum):
    """Loại sự kiện chấm công thô."""

    IN = "IN"
    OUT = "OUT"


class ApprovalStatus(str, Enum):
    """Trạng thái luồng duyệt bản ghi chấm công."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class DayStatus(str, Enum):
    """Phân loại thô của một ngày công."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"


class RecordSource(str, Enum):
    PUNCH = "PUNCH"
    MANUAL = "MANUAL"


class EmployeeType(str, Enum):
    TEACHING_PERSONNEL = "TEACHING_PERSONNEL"
    NON_TEACHING_PERSONNEL = "NON_TEACHING_PERSONNEL"
    CASUAL_PLANTILLA = "CASUAL_PLANTILLA"
