from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Dict, Optional

import yaml

from expense_tracker.utils import normalize_filter

EDIT_DATE_POLICIES = ("preserve", "today", "explicit")

DEFAULT_CONFIG: Dict[str, object] = {
    "db_path": "expenses.db",
    "edit_date_policy": "preserve",
    "default_filter": "ALL",
}

ENV_OVERRIDES: Dict[str, str] = {
    "EXPENSE_TRACKER_DB": "db_path",
    "EXPENSE_TRACKER_EDIT_DATE_POLICY": "edit_date_policy",
}


def _merge_defaults(current: Dict[str, object], defaults: Dict[str, object]) -> Dict[str, object]:
    """Merge missing default keys into the current config recursively."""
    merged = dict(current)
    for key, value in defaults.items():
        if key not in merged:
            merged[key] = copy.deepcopy(value)
        elif isinstance(value, dict) and isinstance(merged[key], dict):
            merged[key] = _merge_defaults(merged[key], value)
    return merged


def validate_edit_date_policy(policy: str) -> str:
    name = str(policy or "").strip().lower()
    if name not in EDIT_DATE_POLICIES:
        raise ValueError(
            f"Unknown edit_date_policy '{policy}'. "
            f"Expected one of: {', '.join(EDIT_DATE_POLICIES)}."
        )
    return name


def load_config(path: Optional[str | Path] = None) -> Dict[str, object]:
    """Load settings from an optional YAML file, then apply env overrides."""
    data: Dict[str, object] = {}
    if path:
        target = Path(path)
        if target.exists():
            with target.open("r", encoding="utf-8") as fp:
                data = yaml.safe_load(fp) or {}
            if not isinstance(data, dict):
                raise ValueError(f"Config file {target} must contain a mapping.")
    config = _merge_defaults(data, DEFAULT_CONFIG)

    for env_name, key in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            config[key] = value

    config["edit_date_policy"] = validate_edit_date_policy(config["edit_date_policy"])
    config["default_filter"] = normalize_filter(config["default_filter"])
    return config


def save_config(config: Dict[str, object], path: str | Path) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as fp:
        yaml.safe_dump(config, fp, sort_keys=False)
