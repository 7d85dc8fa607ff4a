"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Secrets (API keys, credentials) should be in .env, NOT here
- Import these settings in modules: from config.settings import POLL_INTERVAL
- Every value can be overridden from the environment (or .env file)
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# =============================================================================
# REMOTE SERVICE ENDPOINTS
# =============================================================================

# Resource creation and status lookups
API_BASE_URL = os.getenv("GFYCAT_API_BASE_URL", "https://api.gfycat.com/v1")

# Byte upload goes to a separate host
UPLOAD_URL = os.getenv("GFYCAT_UPLOAD_URL", "https://filedrop.gfycat.com/")

# Public site used to build the detail page URL handed back to the caller
SITE_URL = os.getenv("GFYCAT_SITE_URL", "https://gfycat.com")

# =============================================================================
# PUBLISH CONFIGURATION
# =============================================================================

# Delay between two status polls (seconds)
POLL_INTERVAL = float(os.getenv("PUBLISH_POLL_INTERVAL", "1.0"))

# How many "not found yet" answers are tolerated before giving up.
# 0 disables the cap (poll forever).
MAX_PENDING_POLLS = int(os.getenv("PUBLISH_MAX_PENDING_POLLS", "30"))

# Ask the service to skip its duplicate-content check (noMd5)
SKIP_DUPLICATE_CHECK = _env_bool("PUBLISH_SKIP_DUPLICATE_CHECK", True)

# HTTP request timeout (seconds)
# Applies to each request individually, the upload included
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "60"))

# Largest file the controller accepts (bytes)
MAX_FILE_SIZE = int(
    os.getenv("PUBLISH_MAX_FILE_SIZE", str(1024 * 1024 * 1024)),
)  # 1 GB

# Remote API implementation: "gfycat" (or its alias "auto") or "mock"
PUBLISHER_MODE = os.getenv("PUBLISHER_MODE", "gfycat")

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_DIR = Path(os.getenv("LOG_DIR", "/var/log/publisher"))
LOG_FILE = "publisher.log"
LOG_FALLBACK_DIR = Path("logs")
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s | %(name)s"
LOG_BACKUP_COUNT = 7  # days
