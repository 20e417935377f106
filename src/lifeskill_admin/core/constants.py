"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 500

SCHOOL_ID_PREFIX = "SCH"
DEFAULT_SCHOOL_ID_ATTEMPTS = 5
DEFAULT_BULK_UPLOAD_WORKERS = 4
DEFAULT_SCHOOL_PASSWORD = "admin@123"

VISIT_NOTIFICATION_TITLE = "Visits"

# All six must be set before a visit counts as completed.
ATTENDANCE_FIELDS = ("in_time", "out_time", "in_date", "out_date", "file", "file1")

ALLOWED_UPLOAD_EXTENSIONS = {".csv", ".xlsx"}
