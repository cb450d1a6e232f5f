import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

REMOTE = {
    "api_url": os.getenv("API_URL", "https://api.github.com"),
    "token": os.getenv("GITHUB_TOKEN", ""),
    "owner": os.getenv("REMOTE_OWNER", "skokivpr"),
    "repo": os.getenv("REMOTE_REPO", "w5g.github.io"),
    "branch": os.getenv("REMOTE_BRANCH", "main"),
    "path": os.getenv("DEFAULT_STREAM", "w5g-grudzien.json"),
    "timeout": float(os.getenv("REQUEST_TIMEOUT", "15")),
    "settle_seconds": float(os.getenv("SYNC_SETTLE_SECONDS", "3")),
}

# Local mirror of the remote document, config and group matrix
CACHE_PATH = os.getenv("CACHE_PATH", "data/cache.json")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE") or None
LOG_ROTATION = os.getenv("LOG_ROTATION", "10 MB")
LOG_RETENTION = os.getenv("LOG_RETENTION", "7 days")

DEBUG = True
