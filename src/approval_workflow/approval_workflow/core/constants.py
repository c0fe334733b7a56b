"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

HR_DEPARTMENT = "HR"

LOG_ACTION_APPROVED = "Approved"
LOG_ACTION_REJECTED = "Rejected"

DEFAULT_HR_CONTACT_NAME = "HR Department"
DEFAULT_LOG_LEVEL = "INFO"
