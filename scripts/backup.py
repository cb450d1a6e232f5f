"""Backup the cached cycle document.

Note: only the local mirror is copied. Edits that were never pushed are
included, which is the point: the cache may be ahead of the remote store.
"""

from __future__ import annotations

import importlib
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.roster_sync.roster_sync.cache.json_file_cache import JsonFileCache
from src.roster_sync.roster_sync.core.constants import SLOT_ACTIVE_MODULE, SLOT_DATA


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    if not settings.CACHE_PATH:
        raise SystemExit("CACHE_PATH is empty for this environment; nothing to back up.")

    cache = JsonFileCache(settings.CACHE_PATH)
    document = cache.get(SLOT_DATA)
    if not document:
        raise SystemExit(f"No cached cycle in {cache.path}. Pull a stream first.")

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    stream = Path(cache.get(SLOT_ACTIVE_MODULE) or "cycle.json").stem
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"{stream}_{ts}.json"
    out_file.write_text(document, encoding="utf-8")
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
