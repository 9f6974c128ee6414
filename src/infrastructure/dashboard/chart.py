"""
Infrastructure adapter: ComparisonResult → plotly line chart.

PriceChart owns at most one figure.  render() disposes the current figure
before building its replacement, and dispose() may be called any number of
times.
"""

from typing import Optional

import plotly.graph_objects as go

from src.application.use_cases.compare_companies import ComparisonResult
from src.domain.entities.price_record import date_part
from src.infrastructure.dashboard.formatting import axis_title

COMPANY_COLORS = [
    ("rgb(102, 126, 234)", "rgba(102, 126, 234, 0.1)"),
    ("rgb(118, 75, 162)", "rgba(118, 75, 162, 0.1)"),
    ("rgb(255, 99, 132)", "rgba(255, 99, 132, 0.1)"),
    ("rgb(54, 162, 235)", "rgba(54, 162, 235, 0.1)"),
    ("rgb(255, 206, 86)", "rgba(255, 206, 86, 0.1)"),
]


class PriceChart:
    def __init__(self) -> None:
        self._figure: Optional[go.Figure] = None

    @property
    def figure(self) -> Optional[go.Figure]:
        return self._figure

    def render(self, result: ComparisonResult) -> go.Figure:
        """Replace the current figure with one line per company in *result*."""
        self.dispose()

        single = len(result.entries) == 1
        figure = go.Figure()
        for index, entry in enumerate(result.entries):
            border, fill = COMPANY_COLORS[index % len(COMPANY_COLORS)]
            figure.add_trace(
                go.Scatter(
                    x=[date_part(point.timestamp) for point in entry.series.points],
                    y=[point.value for point in entry.series.points],
                    mode="lines",
                    name=entry.company,
                    line=dict(color=border, width=2),
                    fill="tozeroy" if single else None,
                    fillcolor=fill if single else None,
                )
            )

        is_volume = result.field.is_volume
        figure.update_layout(
            title=f"{result.field.value}: {', '.join(result.companies)}",
            hovermode="x unified",
            legend=dict(orientation="h", yanchor="bottom", y=1.02),
            xaxis=dict(title="Date", type="date", tickformat="%b %d, %Y", showgrid=False),
            yaxis=dict(
                title=axis_title(result.field),
                tickformat=",.0f" if is_volume else "$,.2f",
                gridcolor="rgba(0, 0, 0, 0.05)",
            ),
        )
        self._figure = figure
        return figure

    def write_html(self, path: str) -> None:
        if self._figure is None:
            raise RuntimeError("No chart rendered; call render() first.")
        self._figure.write_html(path, include_plotlyjs="cdn")

    def dispose(self) -> None:
        if self._figure is not None:
            self._figure.data = ()
            self._figure = None
