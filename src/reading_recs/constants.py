"""Application-wide constants.

Defaults shared by the configuration models and the pipeline steps.
"""

# Reading speed
DEFAULT_WPM = 220  # Words per minute assumed when the caller gives none

# Network
DEFAULT_USER_AGENT = "reading-recs/1.0"
DEFAULT_FETCH_TIMEOUT_SECONDS = 8.0  # Per (connector, query) branch and per HTTP request
DEFAULT_LINK_CHECK_TIMEOUT_SECONDS = 6.0
DEFAULT_RESULTS_PER_SOURCE = 10

# Enrichment
DEFAULT_SNIPPET_CHARS = 220  # Characters of extracted text used to backfill a snippet

# Ranking
DEFAULT_TOP_COUNT = 3
DEFAULT_BACKUP_COUNT = 10
DEFAULT_UNKNOWN_LENGTH_FIT = 0.15
TOPIC_WEIGHT = 0.45
FIT_WEIGHT = 0.35
RECENCY_MAX_BOOST = 0.1
RECENCY_HORIZON_DAYS = 3650

# Cache
DEFAULT_CACHE_TTL_SECONDS = 30 * 60

# Mock mode
MOCK_CANDIDATE_COUNT = 6
MOCK_WORD_STEP = 80  # Words removed per mock index
MOCK_MIN_WORDS = 120
