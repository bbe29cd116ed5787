"""Machine-readable error codes returned alongside error details."""

VALIDATION_ERROR = "VALIDATION_ERROR"
BOOKMARK_NOT_FOUND = "BOOKMARK_NOT_FOUND"
VIDEO_TITLE_NOT_FOUND = "VIDEO_TITLE_NOT_FOUND"
PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
