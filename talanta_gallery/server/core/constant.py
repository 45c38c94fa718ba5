PROJECT_NAME = "Talanta Art Gallery"
API_PREFIX = "/api"

PASSWORD_MIN_LENGTH = 8
CLOSE_ACCOUNT_REASON_MIN_LENGTH = 10
RESET_TOKEN_TTL_MINUTES = 60
BACKUP_CODE_COUNT = 8

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
CURRENCY = "KES"
