"""Constants and defaults shared across feature modules."""

SESSION_TTL_SECONDS = 600
SESSION_PREFIX = "CLASS"
MANUAL_SESSION_PREFIX = "MANUAL"

DUPLICATE_FACE_THRESHOLD = 80.0
DEFAULT_FACE_MATCH_THRESHOLD = 75.0
DUPLICATE_FACE_CODE = "DUPLICATE_FACE"

DEFAULT_TEACHER_NAME = "Unknown Teacher"
DEFAULT_REJECTION_REASON = "No reason provided"
NOT_SPECIFIED = "Not specified"

UNKNOWN_USER_NAME = "Unknown User"
UNKNOWN_USER_ROLE = "student"

PHOTO_CONTENT_TYPE = "image/jpeg"

# Thread pool size for per-record fan-out (bulk writes, enrichment reads).
MAX_FANOUT_WORKERS = 8

DAY_ORDER = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
