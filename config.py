# config.py
"""All configuration constants for the lawyer directory data layer."""

import os
from dotenv import load_dotenv

load_dotenv()

# Firestore (set FIRESTORE_EMULATOR_HOST to "localhost:8080" to use the emulator)
FIRESTORE_PROJECT_ID = os.environ.get("FIRESTORE_PROJECT_ID")
FIRESTORE_API_KEY = os.environ.get("FIRESTORE_API_KEY")
FIRESTORE_DATABASE = os.environ.get("FIRESTORE_DATABASE", "(default)")
FIRESTORE_EMULATOR_HOST = os.environ.get("FIRESTORE_EMULATOR_HOST")
FIRESTORE_BASE_URL = "https://firestore.googleapis.com/v1"
LAWYERS_COLLECTION = os.environ.get("LAWYERS_COLLECTION", "lawyers")

# Static fallback (JSON list of lawyer dicts; built-in dataset when unset)
LAWYERS_FALLBACK_PATH = os.environ.get("LAWYERS_FALLBACK_PATH")

# Cache
CACHE_DURATION_MS = int(os.environ.get("CACHE_DURATION_MS", 5 * 60 * 1000))

# Paging
DEFAULT_PAGE_SIZE = 50
DEFAULT_SEARCH_LIMIT = 50
FULL_LIST_PAGE_SIZE = 500      # page size when walking the whole directory
FEATURED_COUNT = 6
SIMILAR_COUNT = 3
MAX_PAGES = 100                # safety limit for page iteration

# Remote reads
REMOTE_TIMEOUT = float(os.environ.get("REMOTE_TIMEOUT", 5.0))   # seconds
MAX_RETRIES = 2
RETRY_BACKOFF_BASE = 0.5      # exponential: 0.5s -> 1s

# Output
OUTPUT_DIR = "./output"
CSV_ENCODING = "utf-8-sig"
MULTIVALUE_DELIMITER = " ; "

# Profiles
DEFAULT_IMAGE_URL = "https://images.unsplash.com/photo-1560250097-0b93528c311a?w=400"
DEFAULT_TIER = "standard"

# Logging
LOG_DIR_NAME = "logs"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
QUIET_LOGGERS = ("httpx", "httpcore")   # WARNING on the console unless verbose
