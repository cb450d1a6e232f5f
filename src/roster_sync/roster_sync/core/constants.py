"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

HOURS_PER_FULL_SHIFT = 12
DEFAULT_SETTLE_SECONDS = 3.0
DEFAULT_REQUEST_TIMEOUT = 15
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_BRANCH = "main"
DEFAULT_OWNER = "skokivpr"
DEFAULT_REPO = "w5g.github.io"
DEFAULT_STREAM = "w5g-grudzien.json"
UNKNOWN_CYCLE_LABEL = "UNKNOWN_CYCLE"

# Cache slot names (kept compatible with caches written by the browser client)
SLOT_CONFIG = "w5g_sys_cfg_v2"
SLOT_DATA = "w5g_sys_data_v2"
SLOT_ACTIVE_MODULE = "w5g_active_module"
SLOT_GROUPS = "w5g_sys_groups_v2"

# Stream discovery naming convention
STREAM_PREFIX = "w5g-"
STREAM_SUFFIX = ".json"
RESERVED_STREAM_FILE = "w5g.json"
GROUP_SETTINGS_FILE = "ustawienia.json"

FULL_SHIFT_CODES = frozenset({"1", "2", "P1", "P2", "N1", "N2"})
DAY_BUCKET_CODES = frozenset({"1", "N1", "NP1", "P1"})
NIGHT_BUCKET_CODES = frozenset({"2", "N2", "NP2", "P2"})
DAY_BUCKET = "1"
NIGHT_BUCKET = "2"

WEEKDAYS = ("PN", "WT", "ŚR", "CZ", "PT", "SO", "ND")
WEEKEND_DAYS = frozenset({"SO", "ND"})
