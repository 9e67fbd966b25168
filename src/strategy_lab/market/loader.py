"""Read bars and raw price points from CSV or JSON files."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from strategy_lab.market.models import Bar, PricePoint

_BAR_FIELDS = ("time", "open", "high", "low", "close")


def load_bars(path: str | Path) -> list[Bar]:
    path = Path(path)
    rows = _read_rows(path)
    bars: list[Bar] = []
    for index, row in enumerate(rows):
        missing = [key for key in _BAR_FIELDS if key not in row]
        if missing:
            raise ValueError(f"{path}: row {index} missing {', '.join(missing)}")
        try:
            bars.append(
                Bar(
                    time=int(float(row["time"])),
                    open=float(row["open"]),
                    high=float(row["high"]),
                    low=float(row["low"]),
                    close=float(row["close"]),
                    volume=float(row.get("volume") or 0.0),
                )
            )
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{path}: invalid bar at row {index}") from exc
    return bars


def load_points(path: str | Path) -> list[PricePoint]:
    path = Path(path)
    rows = _read_rows(path)
    points: list[PricePoint] = []
    for index, row in enumerate(rows):
        if "time" not in row or "price" not in row:
            raise ValueError(f"{path}: row {index} missing time or price")
        try:
            points.append(
                PricePoint(
                    time=int(float(row["time"])),
                    price=float(row["price"]),
                    volume=float(row.get("volume") or 0.0),
                )
            )
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{path}: invalid price point at row {index}") from exc
    return points


def _read_rows(path: Path) -> list[dict[str, Any]]:
    if path.suffix.lower() == ".json":
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise ValueError(f"{path}: expected a JSON list")
        return [dict(item) for item in data]
    with path.open("r", encoding="utf-8", newline="") as handle:
        return [dict(row) for row in csv.DictReader(handle)]
