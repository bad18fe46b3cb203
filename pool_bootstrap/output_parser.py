from __future__ import annotations

import json
from typing import Any, List

from .errors import ParseError

_PAYLOAD_OPENERS = ("{", "[")


def extract_payload(output: str) -> Any:
    """Return the JSON payload embedded in CLI output.

    The whole output is tried first. Build logs and warnings may precede the
    payload on the same stream, so on failure every line from the first one
    that opens an object or array onwards is parsed instead. Log lines such as
    ``[warning] ...`` also open with a bracket, so each later opening line is
    tried as a start point before giving up.
    """

    try:
        return json.loads(output)
    except json.JSONDecodeError:
        pass

    lines = output.splitlines()
    starts: List[int] = [i for i, line in enumerate(lines) if line.strip().startswith(_PAYLOAD_OPENERS)]
    if not starts:
        raise ParseError(output)

    first_error = None
    for start in starts:
        buffer = "\n".join(lines[start:]) + "\n"
        try:
            return json.loads(buffer)
        except json.JSONDecodeError as exc:
            if first_error is None:
                first_error = exc

    raise ParseError(output, reason=str(first_error)) from first_error
