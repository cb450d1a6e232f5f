"""Example: use the service layer directly (no Flask, no network).

A cycle is loaded into an in-memory cache, then the derived views are printed.
"""

import importlib

from config import get_settings_module

from src.roster_sync.roster_sync.cache.memory_cache import InMemoryCache
from src.roster_sync.roster_sync.container import build_container
from src.roster_sync.roster_sync.core.constants import SLOT_DATA

SAMPLE = """
{
  "meta": {"days": [30, 31, 1, 2], "weekdays": ["PT", "SO", "ND", "PN"], "months": ["LISTOPAD", "GRUDZIEN"]},
  "workers": [
    {"id": "3", "name": "KOWALSKI", "shifts": ["1", "X", "P1", "2"]},
    {"id": "7", "name": "NOWAK", "shifts": ["2", "N1", "", "U"]}
  ]
}
"""


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(remote=dict(settings.REMOTE), cache=InMemoryCache({SLOT_DATA: SAMPLE}))
    roster = container.roster_service
    roster.load_cached()

    print(roster.dashboard())
    print(roster.operator_profile(0))
    print(roster.fleet())


if __name__ == "__main__":
    main()
