"""Pull one cycle document into the local cache from the command line.

Usage: python scripts/pull_stream.py [w5g-styczen.json]
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.roster_sync.roster_sync.common.logger import setup_logger_from_settings
from src.roster_sync.roster_sync.container import build_container


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    setup_logger_from_settings(settings)
    container = build_container(remote=dict(settings.REMOTE), cache_path=settings.CACHE_PATH)
    roster = container.roster_service
    roster.bootstrap()

    if len(sys.argv) > 1 and sys.argv[1] != roster.config.path:
        notice = roster.switch_stream(sys.argv[1])
    else:
        notice = roster.pull()

    print(f"[{notice.level.value}] {notice.message}")
    fleet = roster.fleet()
    if fleet:
        print(f"OK: {roster.config.path} workers={fleet.worker_count} days={fleet.day_count} avg={fleet.average_hours} H")
    if not notice.ok:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
