"""
Domain entities returned by the query use-cases.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass
from typing import Any

from src.domain.entities.price_record import PriceField, StatSummary


@dataclass(frozen=True)
class SeriesPoint:
    timestamp: str
    company: str
    value: float


@dataclass(frozen=True)
class PriceSeries:
    field: PriceField
    points: list[SeriesPoint]

    def as_rows(self) -> list[dict[str, Any]]:
        """Shape each point as {timestamp, company, <field>: value}."""
        return [
            {
                "timestamp": point.timestamp,
                "company": point.company,
                self.field.value: point.value,
            }
            for point in self.points
        ]


@dataclass(frozen=True)
class FieldMetrics:
    field: PriceField
    summary: StatSummary

    def as_dict(self) -> dict[str, Any]:
        return {
            "field": self.field.value,
            "count": self.summary.count,
            "avg": self.summary.avg,
            "min": self.summary.min,
            "max": self.summary.max,
            "stdDev": self.summary.std_dev,
        }
