"""Write the JSON export (students, attendance, stats) next to the repo."""

from __future__ import annotations

import importlib
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC = REPO_ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from roster_system.common.datetime_utils import now_local
from roster_system.config import get_settings_module
from roster_system.container import build_container, build_store


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = build_store(
        backend=getattr(settings, "STORAGE_BACKEND", "file"),
        directory=getattr(settings, "STORAGE_DIR", "data"),
    )
    reports = build_container(store=store).report_service

    out_dir = REPO_ROOT / "exports"
    out_dir.mkdir(parents=True, exist_ok=True)

    now = now_local()
    out_file = out_dir / reports.export_filename(now=now)
    out_file.write_text(json.dumps(reports.build_export(now=now), indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"OK: Report written: {out_file}")


if __name__ == "__main__":
    main()
