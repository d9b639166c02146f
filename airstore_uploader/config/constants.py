"""
Static constants configuration.

URL templates, header names, server sentinel codes and request defaults that
don't change based on environment.
"""

# =============================================================================
# PLATFORMS
# =============================================================================

PLATFORM_FILEROBOT = "filerobot"
PLATFORM_AIRSTORE = "airstore"

FILEROBOT_BASE_URL = "https://api.filerobot.com/{container}/v3/"
AIRSTORE_BASE_URL = "https://{container}.api.airstore.io/v1/"

FILEROBOT_SECRET_HEADER = "X-Filerobot-Key"
AIRSTORE_SECRET_HEADER = "X-Airstore-Secret-Key"

# =============================================================================
# UPLOAD
# =============================================================================

# Values of the "data_type" discriminator
FILES_FIELD = "files[]"
FILES_URL_FIELD = "files_url[]"
JSON_DATA_TYPE = "application/json"

# upload.state sentinels returned by the storage API
DUPLICATE_CODE = "DUPLICATE"
REPLACING_DATA_CODE = "REPLACING_DATA"

# Chunk size used when streaming a body with progress reporting
UPLOAD_PROGRESS_CHUNK_SIZE = 64 * 1024

# =============================================================================
# GALLERY / SEARCH
# =============================================================================

GALLERY_IMAGES_LIMIT = 250

# =============================================================================
# AUTO-TAGGING
# =============================================================================

AUTOTAGGING_PATH = "post-process/autotagging"
DEFAULT_TAGGING_PROVIDER = "google"
DEFAULT_TAGGING_CONFIDENCE = 60
DEFAULT_TAGGING_LIMIT = 10
DEFAULT_LANGUAGE = "en"
DEFAULT_CLOUDIMAGE_TOKEN = "demo"

# =============================================================================
# IMAGE PREVIEWS
# =============================================================================

CLOUDIMG_BASE_URL = "//scaleflex.cloudimg.io"
DEFAULT_PREVIEW_WIDTH = 300
DEFAULT_PREVIEW_HEIGHT = 200
