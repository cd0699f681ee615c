"""Domain constants shared by the scorer, matcher and API layers."""

ACTIVE_DEMOB_STATUS = "Active - Demobilizing"

POSITION_STATUS_OPEN = "open"
POSITION_STATUS_CLOSED = "closed"
POSITION_STATUSES = (POSITION_STATUS_OPEN, POSITION_STATUS_CLOSED)

MATCH_STATUS_PENDING = "Pending Review"
MATCH_STATUS_PLACED = "Placed"
MATCH_STATUSES = (
    "Pending Review",
    "In Progress",
    "Interview Scheduled",
    "Placed",
    "Rejected",
    "Withdrawn",
)

PRIORITY_CRITICAL = "Critical"
PRIORITY_STANDARD = "Standard"
PRIORITY_EXTERNAL = "External Option"
RETENTION_PRIORITIES = (PRIORITY_CRITICAL, PRIORITY_STANDARD, PRIORITY_EXTERNAL)

DEFAULT_ROLE = "hr_manager"
FALLBACK_ROLE = "viewer"

BULK_IMPORT_SOURCE = "bulk_import"

# Fields whose change re-runs matching for a profile
REMATCH_FIELDS = ("demob_date", "skill_inventory", "mobility_preferences")
