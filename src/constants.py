"""Application constants - centralized configuration values."""

# =============================================================================
# Pagination
# =============================================================================
VIDEOS_PAGE_SIZE = 12
COMMENTS_PAGE_SIZE = 20
USER_VIDEOS_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# =============================================================================
# Categories (the values themselves live on models.channel.Category)
# =============================================================================
CATEGORY_ALL = "All"

# =============================================================================
# Field limits
# =============================================================================
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 6
CHANNEL_NAME_MAX_LENGTH = 50
CHANNEL_DESCRIPTION_MAX_LENGTH = 500
VIDEO_TITLE_MAX_LENGTH = 100
VIDEO_DESCRIPTION_MAX_LENGTH = 1000
COMMENT_MAX_LENGTH = 500

# Primary keys are 32-bit INTEGER columns
MAX_ROW_ID = 2**31 - 1

# =============================================================================
# Defaults
# =============================================================================
DEFAULT_AVATAR_URL = "https://example.com/avatar/default.png"
DEFAULT_CHANNEL_BANNER_URL = "https://example.com/banners/default_banner.png"
DEFAULT_DURATION = "0:00"

# Placeholder duration drawn at upload when none is supplied
DURATION_MIN_MINUTES = 2
DURATION_MAX_MINUTES = 15

# =============================================================================
# Security
# =============================================================================
ACCESS_TOKEN_EXPIRE_DAYS = 7
JWT_ALGORITHM = "HS256"
BCRYPT_ROUNDS = 12
