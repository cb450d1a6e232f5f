SECRET_KEY = "test-secret"

REMOTE = {
    "api_url": "https://api.github.test",
    "token": "",
    "owner": "skokivpr",
    "repo": "w5g.github.io",
    "branch": "main",
    "path": "w5g-grudzien.json",
    "timeout": 1,
    "settle_seconds": 0,
}

# In-memory cache and no settle sleep after a sync
CACHE_PATH = ""

LOG_LEVEL = "WARNING"
LOG_FILE = None

DEBUG = False
TESTING = True
