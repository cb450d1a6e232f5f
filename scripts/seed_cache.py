"""Load a cycle document from disk into the local cache (offline work).

Usage: python scripts/seed_cache.py path/to/w5g-grudzien.json
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.roster_sync.roster_sync.cache.json_file_cache import JsonFileCache
from src.roster_sync.roster_sync.core.constants import SLOT_ACTIVE_MODULE, SLOT_DATA
from src.roster_sync.roster_sync.sync.codec import parse_cycle, serialize_cycle


def main() -> None:
    if len(sys.argv) < 2:
        raise SystemExit("Usage: seed_cache.py <cycle.json>")

    settings = importlib.import_module(get_settings_module())
    if not settings.CACHE_PATH:
        raise SystemExit("CACHE_PATH is empty for this environment; nothing to seed.")

    source = Path(sys.argv[1])
    cycle = parse_cycle(source.read_text(encoding="utf-8"))

    cache = JsonFileCache(settings.CACHE_PATH)
    cache.set(SLOT_DATA, serialize_cycle(cycle))
    cache.set(SLOT_ACTIVE_MODULE, source.name)

    print(f"OK: Seeded cache -> {cache.path} ({len(cycle.workers)} workers, {cycle.day_count} days)")


if __name__ == "__main__":
    main()
