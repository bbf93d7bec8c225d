#!/usr/bin/env python3
"""
Run the hanyu-pinyin checks locally using the ACTIVE virtual environment.

Steps:
  1) uv sync --all-extras --dev (skipped with --no-sync)
  2) black --check on the package, tests and scripts (line length 120)
  3) mypy on the package and scripts
  4) pytest tests/ with coverage of hanyu_pinyin
"""

from __future__ import annotations

import argparse
import os
import shutil
import subprocess
import sys
from pathlib import Path

BLACK = "black==24.8.0"
CHECK_TARGETS = ["hanyu_pinyin", "tests", "scripts"]


def find_repo_root() -> Path:
    here = Path(__file__).resolve().parent
    for candidate in [here, *here.parents]:
        if (candidate / "pyproject.toml").exists():
            return candidate
    return here


REPO = find_repo_root()


def uv_command() -> list[str]:
    uv_path = shutil.which("uv")
    if uv_path:
        return [uv_path]
    print("ERROR: 'uv' not found. Install uv first.", file=sys.stderr)
    sys.exit(2)


def run(cmd: list[str], *, env: dict[str, str] | None = None) -> None:
    print(">>>", " ".join(cmd))
    subprocess.run(cmd, check=True, cwd=str(REPO), env=env)


def check_formatting() -> None:
    uvx_path = shutil.which("uvx")
    if uvx_path:
        run([uvx_path, "--from", BLACK, "black", *CHECK_TARGETS, "--check", "--line-length", "120"])
    else:
        run([sys.executable, "-m", "black", *CHECK_TARGETS, "--check", "--line-length", "120"])


def main() -> None:
    parser = argparse.ArgumentParser(description="Run formatting, type and test checks.")
    parser.add_argument("--no-sync", action="store_true", help="Do not sync dependencies before checking.")
    args = parser.parse_args()

    uv = uv_command()

    if not args.no_sync:
        sync_args = ["sync", "--active", "--all-extras", "--dev"]
        if (REPO / "uv.lock").exists():
            sync_args.append("--frozen")
        run(uv + sync_args)

    check_formatting()

    run(uv + ["run", "--active", "mypy", "hanyu_pinyin", "scripts", "--ignore-missing-imports"])

    env = os.environ.copy()
    env["PYTHONPATH"] = str(REPO)
    run(
        uv
        + [
            "run",
            "--active",
            "pytest",
            "tests/",
            "--cov=hanyu_pinyin",
            "--cov-report=term-missing",
            "--cov-fail-under=80",
        ],
        env=env,
    )

    print("\nALL CHECKS PASSED")


if __name__ == "__main__":
    try:
        main()
    except subprocess.CalledProcessError as e:
        print(f"\nCommand failed with exit code {e.returncode}", file=sys.stderr)
        sys.exit(e.returncode)
