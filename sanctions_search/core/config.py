from decouple import config
from typing import Optional, List


def _optional_float(value: str) -> Optional[float]:
    return float(value) if value not in (None, "") else None


def _optional_str(value: str) -> Optional[str]:
    return value or None


# Application settings
APP_NAME = config("APP_NAME", default="Sanctions Search")
APP_VERSION = config("APP_VERSION", default="0.1.0")
DEBUG = config("DEBUG", default=False, cast=bool)

# Meilisearch
MEILISEARCH_API_URL = config("MEILISEARCH_API_URL", default="http://localhost:7700")
MEILISEARCH_API_KEY = config("MEILISEARCH_API_KEY", default="")
MEILISEARCH_INDEX = config("MEILISEARCH_INDEX", default="sanctions")
MEILISEARCH_ENTITIES_INDEX = config("MEILISEARCH_ENTITIES_INDEX", default="entities")
MEILISEARCH_TIMEOUT_SECONDS = config("MEILISEARCH_TIMEOUT_SECONDS", default=10.0, cast=float)

# Direct search
SEARCH_RESULTS_LIMIT = config("SEARCH_RESULTS_LIMIT", default=10, cast=int)
SEARCH_INPUT_LIMIT = config("SEARCH_INPUT_LIMIT", default=100, cast=int)

# Smart search
SMART_SEARCH_RESULTS_LIMIT = config("SMART_SEARCH_RESULTS_LIMIT", default=5, cast=int)
SMART_SEARCH_INPUT_LIMIT = config("SMART_SEARCH_INPUT_LIMIT", default=1000, cast=int)
SMART_SEARCH_FAIL_FAST = config("SMART_SEARCH_FAIL_FAST", default=False, cast=bool)
INDIVIDUAL_SEARCH_RANKING_THRESHOLD = config(
    "INDIVIDUAL_SEARCH_RANKING_THRESHOLD", default="", cast=_optional_float
)
ENTITY_SEARCH_RANKING_THRESHOLD = config(
    "ENTITY_SEARCH_RANKING_THRESHOLD", default="", cast=_optional_float
)

# Highlighting
HIGHLIGHT_PRE_TAG = config("HIGHLIGHT_PRE_TAG", default="", cast=_optional_str)
HIGHLIGHT_POST_TAG = config("HIGHLIGHT_POST_TAG", default="", cast=_optional_str)

# Translation
AWS_REGION = config("AWS_REGION", default="eu-west-1")
TRANSLATE_SOURCE_LANGUAGE = config("TRANSLATE_SOURCE_LANGUAGE", default="uk")
TRANSLATE_TARGET_LANGUAGE = config("TRANSLATE_TARGET_LANGUAGE", default="ru")
TRANSLITERATION_SCHEME = config("TRANSLITERATION_SCHEME", default="icao_doc_9303")

# CORS Settings
CORS_ORIGINS = config("CORS_ORIGINS", default="*").split(",")
CORS_METHODS = config("CORS_METHODS", default="GET,POST,OPTIONS").split(",")
CORS_HEADERS = config("CORS_HEADERS", default="Content-Type").split(",")

# Logging Settings
LOG_LEVEL = config("LOG_LEVEL", default="INFO")
LOG_DIR = config("LOG_DIR", default="logs")
ACTIVITY_LOG_MAX_SIZE_MB = config("ACTIVITY_LOG_MAX_SIZE_MB", default=10, cast=int)
ACTIVITY_LOG_ROTATION = config("ACTIVITY_LOG_ROTATION", default="midnight")
ERROR_LOG_MAX_SIZE_MB = config("ERROR_LOG_MAX_SIZE_MB", default=10, cast=int)
ERROR_LOG_ROTATION = config("ERROR_LOG_ROTATION", default="midnight")


# Settings class for FastAPI
class Settings:
    app_name: str = APP_NAME
    app_version: str = APP_VERSION
    debug: bool = DEBUG
    meilisearch_api_url: str = MEILISEARCH_API_URL
    meilisearch_api_key: str = MEILISEARCH_API_KEY
    meilisearch_index: str = MEILISEARCH_INDEX
    meilisearch_entities_index: str = MEILISEARCH_ENTITIES_INDEX
    meilisearch_timeout_seconds: float = MEILISEARCH_TIMEOUT_SECONDS
    search_results_limit: int = SEARCH_RESULTS_LIMIT
    search_input_limit: int = SEARCH_INPUT_LIMIT
    smart_search_results_limit: int = SMART_SEARCH_RESULTS_LIMIT
    smart_search_input_limit: int = SMART_SEARCH_INPUT_LIMIT
    smart_search_fail_fast: bool = SMART_SEARCH_FAIL_FAST
    individual_search_ranking_threshold: Optional[float] = INDIVIDUAL_SEARCH_RANKING_THRESHOLD
    entity_search_ranking_threshold: Optional[float] = ENTITY_SEARCH_RANKING_THRESHOLD
    highlight_pre_tag: Optional[str] = HIGHLIGHT_PRE_TAG
    highlight_post_tag: Optional[str] = HIGHLIGHT_POST_TAG
    aws_region: str = AWS_REGION
    translate_source_language: str = TRANSLATE_SOURCE_LANGUAGE
    translate_target_language: str = TRANSLATE_TARGET_LANGUAGE
    transliteration_scheme: str = TRANSLITERATION_SCHEME
    cors_origins: List[str] = CORS_ORIGINS
    cors_methods: List[str] = CORS_METHODS
    cors_headers: List[str] = CORS_HEADERS
    log_level: str = LOG_LEVEL
    log_dir: str = LOG_DIR
    activity_log_max_size_mb: int = ACTIVITY_LOG_MAX_SIZE_MB
    activity_log_rotation: str = ACTIVITY_LOG_ROTATION
    error_log_max_size_mb: int = ERROR_LOG_MAX_SIZE_MB
    error_log_rotation: str = ERROR_LOG_ROTATION

# Create settings instance
settings = Settings()
