"""Example: use the service layer directly, without Flask.

Controllers stay thin; the dashboard numbers come from the services.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.fieldtrack.fieldtrack.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(store_config=settings.STORE_CONFIG)

    overview = container.dashboard_service.overview()
    print(overview.tally)
    for rollup in container.dashboard_service.workers():
        print(f"{rollup.name}: {rollup.total} visits, {rollup.conversion_rate}% converted")


if __name__ == "__main__":
    main()
