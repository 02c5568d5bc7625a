from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.fieldtrack.fieldtrack.container import build_container
from src.fieldtrack.fieldtrack.core.exceptions import StoreError


def main() -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    store_config = dict(settings.STORE_CONFIG)
    container = build_container(store_config=store_config)

    try:
        tally = container.dashboard_service.overview().tally
    except StoreError as e:
        print(f"FAILED: {store_config.get('url')} -> {e}", file=sys.stderr)
        return 1

    print(
        f"OK: {store_config.get('url')} "
        f"(visits={tally.total}, follow_up={tally.follow_up}, converted={tally.converted}, "
        f"rejected={tally.rejected}, revenue={tally.total_revenue:.2f})"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
