import os
from dotenv import load_dotenv

from ghana_law import config as corpus_config

load_dotenv()

MAX_CONTENT_LENGTH = int(os.getenv('MAX_CONTENT_LENGTH', '65536'))  # citations and queries are small
API_KEY = os.getenv("API_KEY", "")
RATE_LIMIT_STORAGE_URI = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")
SENTRY_DSN = os.getenv("SENTRY_DSN", "")
SENTRY_TRACES_SAMPLE_RATE = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.0"))
APP_ENV = os.getenv("APP_ENV", "production")
APP_VERSION = os.getenv("APP_VERSION", "0.1.0")
CORPUS_DB_PATH = corpus_config.CORPUS_DB_PATH

# Search paging
MAX_SEARCH_RESULTS = int(os.getenv("MAX_SEARCH_RESULTS", "50"))
