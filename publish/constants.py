"""
Publish Constants

Protocol-level constants for the publish module: wire values, endpoint
names and the messages carried by progress events.
Tunable values (URLs, intervals, caps) live in config/settings.py.
"""

from enum import Enum

# =============================================================================
# ENDPOINT PATHS
# =============================================================================

# Relative to API_BASE_URL
CREATE_PATH = "/gfycats"
STATUS_PATH = "/gfycats/fetch/status/{id}"

# Relative to SITE_URL
DETAIL_PATH = "/gifs/detail/{id}"

# Endpoint names reported by TransportError
ENDPOINT_CREATE = "create"
ENDPOINT_UPLOAD = "upload"
ENDPOINT_STATUS = "status"

# =============================================================================
# WIRE FIELD NAMES
# =============================================================================

# Multipart form fields of the upload request
UPLOAD_KEY_FIELD = "key"
UPLOAD_FILE_FIELD = "file"

# Status sentinel returned while the upload is not visible to the API yet
STATUS_NOT_FOUND = "NotFoundo"

# =============================================================================
# PROCESSING PHASES
# =============================================================================


class PublishPhase(Enum):
    """Server-reported lifecycle stage of a ticket"""

    PENDING = STATUS_NOT_FOUND
    ENCODING = "encoding"
    COMPLETE = "complete"
    ERROR = "error"

    @classmethod
    def from_wire(cls, value) -> "PublishPhase":
        """Map a raw status string to a phase. Unknown values are errors."""
        for phase in cls:
            if phase.value == value:
                return phase
        return cls.ERROR


# =============================================================================
# PROGRESS EVENTS
# =============================================================================


class ProgressKind(Enum):
    """Kinds of progress events, in the order a successful run emits them"""

    CREATING = "creating"
    UPLOADING = "uploading"
    ENCODING = "encoding"
    COMPLETE = "complete"


MESSAGE_CREATING = "Creating gfycat"
MESSAGE_UPLOADING = "Uploading file"
MESSAGE_ENCODING = "Encoding"
MESSAGE_COMPLETE = "Complete"

# =============================================================================
# PUBLISH STATUS
# =============================================================================


class PublishStatus(Enum):
    """Publish operation status codes"""

    SUCCESS = "success"
    FAILED = "failed"
    TRANSPORT_ERROR = "transport_error"
    PROTOCOL_ERROR = "protocol_error"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    INVALID_FILE = "invalid_file"
