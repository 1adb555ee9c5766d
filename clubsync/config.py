# clubsync/config.py
from dotenv import load_dotenv
import os

load_dotenv()

# Runtime parameters
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
STRICT_EXTRACTION = os.getenv("STRICT_EXTRACTION", "false").lower() in ("1", "true", "yes")

# Session log streaming
LOG_SESSION_TTL = float(os.getenv("LOG_SESSION_TTL", "120"))
LOG_POLL_INTERVAL = float(os.getenv("LOG_POLL_INTERVAL", "0.5"))
SSE_RETRY_MS = 2000

# Matching
NAME_NOISE = "pony club"
MATCH_THRESHOLDS = {
    "exact": 0.9,
    "high": 0.8,
    "medium": 0.6,
    "low": 0.4,
}

# HTTP
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8080"))

# File names
INPUT_JSON = os.getenv("INPUT_JSON", "pca_clubs.json")
CLUBS_CSV = os.getenv("CLUBS_CSV", "clubs.csv")
ZONES_CSV = os.getenv("ZONES_CSV", "zones.csv")
OUTPUT_CSV = os.getenv("OUTPUT_CSV", "club_matches.csv")
