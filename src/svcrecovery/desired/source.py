"""Load desired ("should") recovery records from a JSON document.

Two layouts are accepted::

    [{"name": "Spooler", "reset_period": 86400, ...}, ...]

    {"Spooler": {"reset_period": 86400, ...}, "W32Time": null}

In the keyed layout the key supplies the service name, and a ``null`` value
means the service has no managed state.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from svcrecovery.exceptions import ParseError
from svcrecovery.models.recovery import RecoveryConfig

_RECORDS = TypeAdapter(list[RecoveryConfig])


def parse_desired_state(raw: str) -> dict[str, RecoveryConfig | None]:
    try:
        data: Any = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Malformed desired-state JSON: {exc}") from exc

    if isinstance(data, dict):
        records: list[Any] = []
        desired: dict[str, RecoveryConfig | None] = {}
        for name, body in data.items():
            if body is None:
                desired[name] = None
                continue
            if not isinstance(body, dict):
                raise ParseError(f"Desired state for {name} must be an object")
            records.append({**body, "name": name})
            desired[name] = None
    elif isinstance(data, list):
        records = data
        desired = {}
    else:
        raise ParseError("Desired state must be a JSON list or object")

    try:
        configs = _RECORDS.validate_python(records)
    except ValidationError as exc:
        raise ParseError(f"Invalid desired state: {exc}") from exc

    for config in configs:
        if config.name in desired and desired[config.name] is not None:
            raise ParseError(f"Duplicate desired state for {config.name}")
        desired[config.name] = config
    return desired


def load_desired_state(path: Path | str) -> dict[str, RecoveryConfig | None]:
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ParseError(f"Cannot read desired state from {path}: {exc}") from exc
    return parse_desired_state(raw)
