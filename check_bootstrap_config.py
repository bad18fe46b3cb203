#!/usr/bin/env python3
"""Diagnostic script to check the pool bootstrap setup before deploying."""

from __future__ import annotations

import sys

from pool_bootstrap import DEFAULT_ENV_FILE, load_settings
from pool_bootstrap.diagnostics import collect_issues, collect_notes


def main() -> int:
    print("=" * 60)
    print("Pool Bootstrap Configuration Diagnostic")
    print("=" * 60)

    if DEFAULT_ENV_FILE.exists():
        print(f"\n✓ Found .env file: {DEFAULT_ENV_FILE}")
    else:
        print(f"\n○ No .env file at {DEFAULT_ENV_FILE}; using environment and defaults")

    settings = load_settings()
    print(f"\n  Sui CLI:         {settings.sui_bin}")
    print(f"  Move package:    {settings.package_path}")
    print(f"  Frontend config: {settings.config_path}")
    print(f"  Run log:         {settings.log_file}")
    print(f"  Mint amount:     {settings.mint_amount}")
    print(f"  Split amount:    {settings.split_amount} MIST")

    for note in collect_notes(settings):
        print(f"\n  ⚠️  {note}")

    issues = collect_issues(settings)
    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    if issues:
        print(f"\n⚠️  Found {len(issues)} issue(s) to fix:\n")
        for i, issue in enumerate(issues, 1):
            print(f"  {i}. {issue}")
        return 1

    print("\n✅ All checks passed! Run: python3 run_pool_bootstrap.py")
    return 0


if __name__ == "__main__":
    sys.exit(main())
