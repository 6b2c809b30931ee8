"""Station snapshot loader with database-first approach, falling back to a local file."""

from __future__ import annotations

import csv
import functools
import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from openpyxl import load_workbook

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import Station

_FALSEY = {"false", "0", "no", "n"}


class StationSnapshotError(RuntimeError):
    """Raised when no station snapshot can be read."""


def _first(row: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = row.get(key)
        if value is not None and value != "":
            return value
    return None


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).replace(",", ""))
    except ValueError as exc:
        raise ValueError(f"Unable to parse float from value '{value}'") from exc


def _coerce_int(value: Any, default: int = 0) -> int:
    number = _coerce_float(value)
    return default if number is None else int(number)


def _is_approved(row: Mapping[str, Any]) -> bool:
    value = row.get("is_approved")
    if value is None or value == "":
        return True
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() not in _FALSEY


def station_from_row(row: Mapping[str, Any]) -> Optional[Station]:
    """Map a directory row onto a ``Station``; rows without coordinates yield None.

    Accepts both the directory column names (``power_output_kw``,
    ``available_slots``, ``estimated_wait_time``) and the engine's own names.
    """

    lat = _coerce_float(_first(row, "latitude", "Latitude", "lat"))
    lon = _coerce_float(_first(row, "longitude", "Longitude", "lon", "lng"))
    if lat is None or lon is None:
        return None

    station_id = _first(row, "id", "station_id", "StationId")
    name = _first(row, "name", "Name")
    free_slots = _coerce_int(_first(row, "live_available_slots", "free_slots", "available_slots"))
    total_slots = _coerce_int(_first(row, "total_slots"), default=free_slots)
    wait = _coerce_float(_first(row, "estimated_wait_minutes", "estimated_wait_time"))
    rating = _coerce_float(_first(row, "rating"))
    return Station(
        id=str(station_id if station_id is not None else name or f"{lat:.6f},{lon:.6f}").strip(),
        latitude=lat,
        longitude=lon,
        power_kw=max(0.0, _coerce_float(_first(row, "power_kw", "power_output_kw")) or 0.0),
        price_per_kwh=max(0.0, _coerce_float(_first(row, "price_per_kwh")) or 0.0),
        free_slots=max(0, free_slots),
        total_slots=max(0, total_slots),
        estimated_wait_minutes=wait,
        name=str(name).strip() if name is not None else None,
        address=(str(row.get("address") or "").strip() or None),
        connector_type=(str(row.get("connector_type") or "").strip() or None),
        rating=rating,
        status=(str(row.get("status") or "").strip() or None),
    )


def _stations_from_rows(rows: Iterable[Mapping[str, Any]]) -> tuple[Station, ...]:
    stations: list[Station] = []
    for row in rows:
        if not _is_approved(row):
            continue
        try:
            station = station_from_row(row)
        except ValueError as e:
            logging.warning(f"Skipping invalid station row: {e}")
            continue
        if station is not None:
            stations.append(station)
    return tuple(stations)


def _load_stations_from_database() -> tuple[Station, ...] | None:
    """Load stations from Supabase. Returns None if database not available or empty."""
    supabase = get_supabase_client()
    if not supabase:
        return None

    try:
        response = supabase.table(settings.stations_table).select("*").eq("is_approved", True).execute()
    except Exception as e:
        logging.warning(f"Station directory query failed, falling back to file: {e}")
        return None
    if not response.data:
        return None
    stations = _stations_from_rows(response.data)
    return stations or None


def _read_xlsx_rows(path: Path) -> list[dict[str, Any]]:
    wb = load_workbook(path, data_only=True, read_only=True)
    try:
        rows = wb.active.iter_rows(min_row=1, values_only=True)
        header = next(rows, None)
        if header is None:
            raise ValueError(f"Station workbook '{path}' is empty.")
        names = [str(cell).strip() if cell is not None else "" for cell in header]
        return [dict(zip(names, row)) for row in rows]
    finally:
        wb.close()


@functools.lru_cache(maxsize=4)
def load_stations_from_file(source: Optional[Path] = None) -> tuple[Station, ...]:
    """Load stations from a CSV, JSON or XLSX snapshot."""

    path = source or settings.station_file
    if not path.exists():
        raise FileNotFoundError(f"Station file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        with path.open(mode="r", encoding="utf-8-sig", newline="") as handle:
            reader = csv.DictReader(handle)
            if not reader.fieldnames:
                raise ValueError(f"Station file '{path}' is missing a header row.")
            return _stations_from_rows(list(reader))
    if suffix == ".json":
        with path.open(mode="r", encoding="utf-8") as handle:
            payload = json.load(handle)
        rows = payload.get("stations", []) if isinstance(payload, dict) else payload
        if not isinstance(rows, list):
            raise ValueError(f"Station file '{path}' must hold a list of stations.")
        return _stations_from_rows(rows)
    if suffix in {".xlsx", ".xlsm"}:
        return _stations_from_rows(_read_xlsx_rows(path))
    raise ValueError(f"Unsupported station file format '{suffix}'.")


def get_station_snapshot(source: Path | None = None) -> tuple[Station, ...]:
    """Get stations from the database first, falling back to the station file."""

    db_stations = _load_stations_from_database()
    if db_stations:
        logging.info(f"Loaded {len(db_stations)} stations from the station directory")
        return db_stations
    return load_stations_from_file(source)
