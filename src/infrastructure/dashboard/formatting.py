"""
Display formatting for metric values: volumes as grouped integers, prices as
dollars with two decimals.
"""

from typing import Optional

from src.application.use_cases.compare_companies import ComparisonResult
from src.domain.entities.price_record import PriceField

METRIC_LABELS = (
    ("count", "Count"),
    ("avg", "Average"),
    ("min", "Minimum"),
    ("max", "Maximum"),
    ("std_dev", "Std Deviation"),
)


def format_value(value: float, field: PriceField) -> str:
    if field.is_volume:
        return f"{value:,.0f}" if float(value).is_integer() else f"{value:,.4f}".rstrip("0")
    return f"${value:,.2f}"


def axis_title(field: PriceField) -> str:
    return "Volume" if field.is_volume else "Price ($)"


def summarize(result: ComparisonResult, start_date: Optional[str], end_date: Optional[str]) -> str:
    """Render the comparison as plain text, one block per company."""
    lines = [
        f"Showing: {result.field.value} data for {', '.join(result.companies)}",
        f"Date Range: {start_date or 'beginning'} to {end_date or 'latest'}",
        f"Data Points: {result.point_count:,}",
    ]
    for entry in result.entries:
        lines.append("")
        lines.append(entry.company)
        if entry.metrics is None:
            lines.append("  metrics unavailable")
            continue
        summary = entry.metrics.summary
        for attr, label in METRIC_LABELS:
            value = getattr(summary, attr)
            text = f"{value:,}" if attr == "count" else format_value(value, result.field)
            lines.append(f"  {label:<14} {text}")
    return "\n".join(lines)
