"""Dashboard configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_PALETTE: tuple[str, ...] = (
    "#6366f1",
    "#22c55e",
    "#f59e0b",
    "#ef4444",
    "#14b8a6",
    "#a855f7",
    "#3b82f6",
    "#84cc16",
)
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class DashboardConfig:
    output_dir: Path
    export_filename: str
    template_filename: str
    auto_load_template: bool
    palette: tuple[str, ...] = DEFAULT_PALETTE


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid {name}: {raw}")


def _env_filename(name: str, default: str) -> str:
    raw = os.getenv(name, default).strip()
    if not raw or Path(raw).name != raw:
        raise ValueError(f"{name} must be a bare file name, got {raw!r}")
    return raw


def load_config() -> DashboardConfig:
    return DashboardConfig(
        output_dir=Path(os.getenv("ROASBOARD_OUTPUT_DIR", "output")),
        export_filename=_env_filename("ROASBOARD_EXPORT_FILENAME", "filtered_marketing_data.csv"),
        template_filename=_env_filename("ROASBOARD_TEMPLATE_FILENAME", "marketing_template.csv"),
        auto_load_template=_env_flag("ROASBOARD_AUTO_LOAD_TEMPLATE", True),
    )
