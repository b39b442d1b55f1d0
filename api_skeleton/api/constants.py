"""API-related constants."""

# HTTP Status Codes
HTTP_500_INTERNAL_SERVER_ERROR = 500

# HTTP Headers
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

# Pagination query parameters (flat keys, brackets are part of the name)
PAGE_NUMBER_PARAM = "page[number]"
PAGE_SIZE_PARAM = "page[size]"

# Content types
JSON_CONTENT_TYPES = {"application/json", "application/vnd.api+json"}

# Admin meta endpoint
META_TIME_FORMAT = "%Y-%m-%d %H:%M:%S%z"
