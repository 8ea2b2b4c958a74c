from __future__ import annotations

"""Environment health checks.

CONTRACT
- Inputs: Project path
- Outputs (required):
  - DoctorReport (ok=bool, items=[(name, status, details)])
- Invariants:
  - Checks: package.json, next config, git, npm, cargo, tauri cli, xcodebuild
  - Does not modify the project (read-only checks)
- Failure:
  - Returns DoctorReport with ok=False if critical checks fail (package.json, npm, cargo)
"""

import json
import sys
from dataclasses import dataclass
from pathlib import Path

from .errors import SpawnError
from .plans import IOS_ROOT, MARKER_FILE, NATIVE_ROOT
from .util.shell import run_cmd, which


@dataclass(frozen=True)
class DoctorItem:
    name: str
    status: str
    details: str


@dataclass(frozen=True)
class DoctorReport:
    ok: bool
    items: list[DoctorItem]


def doctor_report(project_dir: Path) -> DoctorReport:
    items: list[DoctorItem] = []
    ok = True

    # 1. Critical: Next.js project
    manifest = project_dir / MARKER_FILE
    if manifest.exists():
        try:
            data = json.loads(manifest.read_text(encoding="utf-8"))
            deps: dict = {}
            for section in ("dependencies", "devDependencies"):
                declared = data.get(section)
                deps.update(declared if isinstance(declared, dict) else {})
            if "next" in deps:
                items.append(DoctorItem("package.json", "OK", f"next {deps['next']}"))
            else:
                items.append(DoctorItem("package.json", "WARN", "No `next` dependency declared"))
        except OSError as e:
            ok = False
            items.append(DoctorItem("package.json", "FAIL", f"Unreadable: {e}"))
        except (ValueError, AttributeError) as e:
            ok = False
            items.append(DoctorItem("package.json", "FAIL", f"Invalid JSON: {e}"))
    else:
        ok = False
        items.append(DoctorItem("package.json", "FAIL", "Not found (run inside a Next.js project)"))

    next_conf = next(
        (n for n in ("next.config.ts", "next.config.mjs", "next.config.js") if (project_dir / n).exists()),
        None,
    )
    if next_conf:
        items.append(DoctorItem("next config", "OK", next_conf))
    else:
        items.append(DoctorItem("next config", "INFO", "None found; bootstrap will create next.config.ts"))

    # 2. Binaries
    for name, critical in (("git", False), ("npm", True), ("cargo", True)):
        path = which(name)
        if path:
            items.append(DoctorItem(name, "OK", path))
        elif critical:
            ok = False
            items.append(DoctorItem(name, "FAIL", f"{name} not found in PATH"))
        else:
            items.append(DoctorItem(name, "WARN", f"{name} not found; `status` unavailable"))

    if which("cargo"):
        try:
            res = run_cmd("cargo", ["tauri", "--version"], project_dir)
        except SpawnError as e:
            items.append(DoctorItem("tauri cli", "WARN", str(e)))
        else:
            if res.success:
                items.append(DoctorItem("tauri cli", "OK", res.stdout_text.strip()))
            else:
                items.append(DoctorItem("tauri cli", "INFO", "Not installed; bootstrap will install it"))

    if sys.platform == "darwin":
        xcode = which("xcodebuild")
        if xcode:
            items.append(DoctorItem("xcodebuild", "OK", xcode))
        else:
            items.append(DoctorItem("xcodebuild", "WARN", "Xcode not found; iOS build will fail"))
    else:
        items.append(DoctorItem("xcodebuild", "INFO", "iOS builds require macOS"))

    # 3. Prior runs
    for rel in (NATIVE_ROOT, IOS_ROOT):
        state = "present" if (project_dir / rel).exists() else "absent"
        items.append(DoctorItem(rel, "INFO", state))

    return DoctorReport(ok=ok, items=items)
