"""File-based persistence for trip plan runs.

Each persisted plan gets its own ``outputs/trip_<timestamp>`` directory under
the data root holding ``summary.json``, ``stops.csv`` and ``route.geojson``.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..config import settings


class FileStorage:
    """Run directories for persisted trip plans under ``<data_root>/outputs``."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.output_root = self.root / "outputs"
        self.output_root.mkdir(parents=True, exist_ok=True)

    def make_run_directory(self, prefix: str = "trip") -> Path:
        # microseconds keep back-to-back plans in separate directories
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        path = self.output_root / f"{prefix}_{timestamp}"
        path.mkdir(parents=True, exist_ok=False)
        return path

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent)

    def write_geojson(self, path: Path, feature_collection: dict) -> None:
        if feature_collection.get("type") != "FeatureCollection":
            raise ValueError("Route overlay must be a GeoJSON FeatureCollection.")
        self.write_json(path, feature_collection)

    def write_csv(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
