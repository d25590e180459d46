"""LaborReport — whole-building crew estimate, with Markdown output."""

from __future__ import annotations

import json
from typing import Any


class LaborReport:
    """Per-trade quantities and the daily crew they require."""

    def __init__(
        self,
        building_id: str = "",
        building_name: str = "",
        quantities: dict[str, float] | None = None,
        workers: dict[str, int] | None = None,
        productivity: dict[str, float] | None = None,
        pump_car_count: int = 0,
        buildings: list[str] | None = None,
    ) -> None:
        self.building_id = building_id
        self.building_name = building_name
        self.quantities = quantities or {}
        self.workers = workers or {}
        self.productivity = productivity or {}
        self.pump_car_count = pump_car_count
        self.buildings = buildings or ([building_id] if building_id else [])

    @property
    def total_workers(self) -> int:
        return sum(self.workers.values())

    @classmethod
    def combine(cls, reports: list[LaborReport], name: str = "project") -> LaborReport:
        """Sum building reports into one."""
        quantities: dict[str, float] = {}
        workers: dict[str, int] = {}
        buildings: list[str] = []
        pump_cars = 0
        for report in reports:
            for key, value in report.quantities.items():
                quantities[key] = quantities.get(key, 0.0) + value
            for key, value in report.workers.items():
                workers[key] = workers.get(key, 0) + value
            buildings.extend(report.buildings)
            pump_cars += report.pump_car_count
        productivity = dict(reports[0].productivity) if reports else {}
        return cls(
            building_id="",
            building_name=name,
            quantities=quantities,
            workers=workers,
            productivity=productivity,
            pump_car_count=pump_cars,
            buildings=buildings,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "building_id": self.building_id,
            "building_name": self.building_name,
            "quantities": dict(self.quantities),
            "workers": dict(self.workers),
            "productivity": dict(self.productivity),
            "pump_car_count": self.pump_car_count,
            "total_workers": self.total_workers,
            "buildings": list(self.buildings),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    def to_markdown(self) -> str:
        """Render the crew table."""
        lines: list[str] = []
        title = self.building_name or self.building_id or "Unknown"
        lines.append(f"# Labor Estimate: {title}")
        lines.append("")
        if len(self.buildings) > 1:
            lines.append(f"**Buildings:** {', '.join(self.buildings)}")
        lines.append(f"**Pump cars:** {self.pump_car_count}")
        lines.append("")

        lines.append("| Trade | Quantity | Basis | Daily workers |")
        lines.append("|-------|----------|-------|---------------|")
        for trade, quantity in self.quantities.items():
            basis = self.productivity.get(trade)
            basis_text = f"{basis:g}/worker" if basis else "pump cars"
            count = self.workers.get(trade, 0)
            lines.append(f"| {trade} | {quantity:,.2f} | {basis_text} | {count} |")
        lines.append(f"| **Total** | | | **{self.total_workers}** |")
        lines.append("")
        return "\n".join(lines)
