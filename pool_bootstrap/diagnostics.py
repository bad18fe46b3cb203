"""Pre-flight checks run before a bootstrap attempt."""

from __future__ import annotations

import shutil
from typing import List

from .config_writer import missing_assignments
from .constants import CONFIG_NAMES, MOVE_MANIFEST, PUBLISHED_RECORD
from .env_utils import BootstrapSettings


def collect_issues(settings: BootstrapSettings) -> List[str]:
    issues: List[str] = []

    if shutil.which(settings.sui_bin) is None:
        issues.append(f"Sui CLI not found on PATH: {settings.sui_bin}")

    package_path = settings.package_path
    if not package_path.is_dir():
        issues.append(f"Move package directory not found: {package_path}")
    elif not (package_path / MOVE_MANIFEST).exists():
        issues.append(f"{MOVE_MANIFEST} missing in {package_path}")

    config_path = settings.config_path
    if not config_path.exists():
        issues.append(f"Config file not found: {config_path}")
    else:
        missing = missing_assignments(config_path.read_text(encoding="utf-8"), list(CONFIG_NAMES))
        for name in missing:
            issues.append(f"{config_path} has no {name} assignment")

    return issues


def collect_notes(settings: BootstrapSettings) -> List[str]:
    """Non-blocking observations worth showing next to the issues."""

    notes: List[str] = []
    if (settings.package_path / PUBLISHED_RECORD).exists():
        notes.append(f"{PUBLISHED_RECORD} from a previous run will be deleted before publishing")
    if not settings.consolidate:
        notes.append("Coin consolidation is disabled; the split draws from the gas coin")
    if settings.propagation_attempts <= 0:
        notes.append("Propagation polling disabled; a fixed delay follows publishing")
    return notes
