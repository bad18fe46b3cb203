from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Pattern

from .errors import ConfigPatternNotFound
from .logging_utils import get_logger


def assignment_pattern(name: str) -> Pattern[str]:
    """Match ``[export] [const] NAME = "..."`` on a single line."""

    return re.compile(
        r'^(?P<head>[ \t]*(?:export[ \t]+)?(?:(?:const|let|var)[ \t]+)?'
        + re.escape(name)
        + r'[ \t]*=[ \t]*")(?P<value>[^"\n]*)(?P<tail>".*)$',
        re.MULTILINE,
    )


def missing_assignments(content: str, names: List[str]) -> List[str]:
    return [name for name in names if not assignment_pattern(name).search(content)]


def update_config(
    path: Path,
    values: Mapping[str, str],
    strict: bool = True,
    logger: Optional[logging.Logger] = None,
) -> Dict[str, str]:
    """Rewrite the quoted literal of each ``NAME = "..."`` assignment in ``path``.

    With ``strict`` set a missing assignment raises before anything is
    written; otherwise it is logged and skipped. Returns the values that were
    written.
    """

    log = logger or get_logger()
    with path.open("r", encoding="utf-8", newline="") as handle:
        content = handle.read()

    missing = missing_assignments(content, list(values))
    if missing and strict:
        raise ConfigPatternNotFound(path, missing)

    written: Dict[str, str] = {}
    for name, value in values.items():
        if name in missing:
            log.warning(f"No {name} assignment in {path}; left unchanged")
            continue
        content = assignment_pattern(name).sub(
            lambda m, v=value: f"{m.group('head')}{v}{m.group('tail')}", content, count=1
        )
        written[name] = value

    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(content)
    log.info(f"Config updated: {path}")
    return written
