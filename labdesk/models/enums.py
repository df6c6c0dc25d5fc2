from enum import Enum

# Member names match the stored values so SQL enums round-trip as-is.

class AppRole(str, Enum):
    admin = "admin"
    lab_staff = "lab_staff"
    student = "student"


class ComputerStatus(str, Enum):
    available = "available"
    in_use = "in_use"
    maintenance = "maintenance"
    retired = "retired"


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


class IssueStatus(str, Enum):
    pending = "pending"
    in_progress = "in_progress"
    resolved = "resolved"
    closed = "closed"


class IssuePriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class NoticePriority(str, Enum):
    low = "low"
    normal = "normal"
    high = "high"
    urgent = "urgent"


class MaintenanceType(str, Enum):
    preventive = "Preventive"
    corrective = "Corrective"
    hardware_upgrade = "Hardware Upgrade"
    software_update = "Software Update"
    cleaning = "Cleaning"
    repair = "Repair"
    inspection = "Inspection"
    other = "Other"
