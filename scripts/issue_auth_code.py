"""Issue a teacher registration code from the command line.

    python scripts/issue_auth_code.py                 # random code
    python scripts/issue_auth_code.py GURU2025        # explicit code
    python scripts/issue_auth_code.py --list          # show all codes
"""
from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.jurnal_guru.jurnal_guru.container import build_container_from_settings
from src.jurnal_guru.jurnal_guru.core.exceptions import ValidationError
from src.jurnal_guru.jurnal_guru.logging_config import configure_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Issue or list teacher registration codes.")
    parser.add_argument("code", nargs="?", default="", help="code to issue (random if omitted)")
    parser.add_argument("--issued-by", default="admin", help="username recorded as issuer")
    parser.add_argument("--list", action="store_true", help="list codes instead of issuing one")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FORMAT", "text"))
    container = build_container_from_settings(settings)

    if args.list:
        for entry in container.auth_code_service.list_codes():
            status = f"used by {entry.used_by_account_id}" if entry.used else "available"
            print(f"{entry.code}\t{entry.issued_by}\t{entry.issued_at}\t{status}")
        return 0

    try:
        entry = container.auth_code_service.issue(args.code, args.issued_by)
    except ValidationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"OK: Issued code {entry.code}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
