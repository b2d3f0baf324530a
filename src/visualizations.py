import plotly.graph_objects as go

from src.formatting import FormatPolicy
from src.projection import Projection, ViewMode

COLORS = ["#8884d8", "#82ca9d", "#ffc658", "#ff8042", "#8dd1e1"]


# -------------------------
# Helpers
# -------------------------
def series_color(index: int) -> str:
    """Stable color for the n-th row of a projection"""
    return COLORS[index % len(COLORS)]


def _flat_series(projection: Projection, policy: FormatPolicy):
    names = list(projection.rows)
    values = [projection.plot_value(r) for r in names]
    labels = [policy.format_cell(projection.cell(r), projection.percent) for r in names]
    return names, values, labels


def _apply_layout(
    fig: go.Figure, policy: FormatPolicy, title, percent: bool, height: int
) -> go.Figure:
    fig.update_layout(
        title=title,
        height=height,
        showlegend=True,
        margin=dict(l=20, r=20, t=50 if title else 20, b=20),
    )
    if percent:
        fig.update_yaxes(ticksuffix=policy.percent_suffix)
    return fig


# -------------------------
# Charts
# -------------------------
def create_flat_bar_chart(projection: Projection, policy: FormatPolicy, title=None):
    """Single-series bar chart of a flat projection"""
    names, values, labels = _flat_series(projection, policy)

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=names,
            y=values,
            name="value",
            marker_color=COLORS[0],
            customdata=labels,
            hovertemplate="%{x}: %{customdata}<extra></extra>",
        )
    )
    return _apply_layout(fig, policy, title, projection.percent, height=340)


def create_flat_pie_chart(projection: Projection, policy: FormatPolicy, title=None):
    """Pie chart of a flat projection, one slice per row"""
    names, values, labels = _flat_series(projection, policy)

    fig = go.Figure()
    fig.add_trace(
        go.Pie(
            labels=names,
            values=values,
            sort=False,
            marker=dict(colors=[series_color(i) for i in range(len(names))]),
            customdata=labels,
            textposition="inside",
            textinfo="percent+label",
            hovertemplate="%{label}: %{customdata}<extra></extra>",
        )
    )
    return _apply_layout(fig, policy, title, False, height=320)


def create_matrix_bar_chart(
    projection: Projection, policy: FormatPolicy, title=None, stacked: bool = False
):
    """One bar series per row, periods on the x axis"""
    fig = go.Figure()

    for idx, row in enumerate(projection.rows):
        fig.add_trace(
            go.Bar(
                x=list(projection.columns),
                y=list(projection.series(row)),
                name=row,
                marker_color=series_color(idx),
                customdata=[
                    policy.format_cell(projection.cell(row, col), projection.percent)
                    for col in projection.columns
                ],
                hovertemplate="%{x}: %{customdata}<extra>" + row + "</extra>",
            )
        )

    fig.update_layout(barmode="stack" if stacked else "group", hovermode="x unified")
    return _apply_layout(fig, policy, title, projection.percent, height=340)


def create_stats_chart(
    projection: Projection, policy: FormatPolicy, title=None, stacked: bool = False
):
    """
    Chart for a projection, or None when there is nothing to plot
    (including a pie whose slices all weigh zero).

    Pie is only drawn for flat data; the projection's mode has already
    been resolved for matrices.
    """
    if projection.is_empty:
        return None

    if projection.is_matrix:
        return create_matrix_bar_chart(projection, policy, title=title, stacked=stacked)

    if projection.mode is ViewMode.CHART_PIE:
        if sum(projection.plot_value(r) for r in projection.rows) == 0:
            return None
        return create_flat_pie_chart(projection, policy, title=title)

    return create_flat_bar_chart(projection, policy, title=title)
