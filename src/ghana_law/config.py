import os
from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))

DATA_DIR = os.getenv("GHANA_LAW_DATA_DIR", os.path.join(PROJECT_ROOT, "data"))
SEED_DIR = os.getenv("SEED_DIR", os.path.join(DATA_DIR, "seed"))
SOURCE_DIR = os.getenv("SOURCE_DIR", os.path.join(DATA_DIR, "source"))
INDEX_PATH = os.path.join(SOURCE_DIR, "act-index.json")
CORPUS_DB_PATH = os.getenv("CORPUS_DB_PATH", os.path.join(DATA_DIR, "database.db"))

# Upstream (GhanaLII / AfricanLII platform, Akoma Ntoso markup)
BASE_URL = os.getenv("GHALII_BASE_URL", "https://ghalii.org").rstrip("/")
USER_AGENT = os.getenv(
    "GHANA_LAW_USER_AGENT",
    "GhanaLawCorpus/1.0 (+https://github.com/ghana-law-corpus/ghana-law-corpus)",
)

# Fetch politeness
MIN_DELAY_MS = int(os.getenv("FETCH_MIN_DELAY_MS", "500"))
MAX_RETRIES = int(os.getenv("FETCH_MAX_RETRIES", "3"))
REQUEST_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "45"))  # large acts are slow to render
DISCOVERY_PAGE_LIMIT = int(os.getenv("DISCOVERY_PAGE_LIMIT", "200"))

# Update checker
UPDATE_CHECK_TIMEOUT = float(os.getenv("UPDATE_CHECK_TIMEOUT", "15"))
UPDATE_CHECK_PAGES = int(os.getenv("UPDATE_CHECK_PAGES", "3"))

# Build metadata written into db_metadata
JURISDICTION = "GH"
SOURCE_NAME = "ghalii.org"
LICENCE = "GhanaLII open access"
SCHEMA_VERSION = "2"
