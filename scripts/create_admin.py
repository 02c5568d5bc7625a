from __future__ import annotations

import getpass
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.fieldtrack.fieldtrack.container import build_container
from src.fieldtrack.fieldtrack.core.enums import Role
from src.fieldtrack.fieldtrack.core.exceptions import DomainError


def main() -> int:
    if len(sys.argv) != 3:
        print("usage: create_admin.py NAME EMAIL", file=sys.stderr)
        return 2
    name, email = sys.argv[1], sys.argv[2]

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(store_config=dict(settings.STORE_CONFIG))

    password = getpass.getpass("Password: ")
    confirm = getpass.getpass("Confirm password: ")
    try:
        user = container.registration_service.register(
            name=name,
            email=email,
            mobile="",
            password=password,
            confirm_password=confirm,
            role=Role.ADMIN,
        )
    except DomainError as e:
        print(f"FAILED: {e}", file=sys.stderr)
        return 1

    print(f"OK: Created admin {user.name} (id={user.user_id})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
