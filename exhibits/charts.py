from __future__ import annotations

from typing import Any, Dict

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()

BAR_COLOR = "#F7E1E1"
BAR_HOVER_COLOR = "#D18E8E"
LINE_COLOR = "#78716c"
REGION_PALETTE = ["#D9A6A6", "#D18E8E", "#DB968F", "#F2AE99", "#EBB4A2", "#F5CBA7", "#F5C6B4", "#F4C1C1"]


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def period_chart(periods: pd.DataFrame) -> alt.LayerChart:
    """5-year totals as bars with the yearly average drawn over them."""
    order = periods["label"].tolist()
    hover = alt.selection_point(fields=["label"], on="mouseover", empty=False)
    base = alt.Chart(periods).encode(x=alt.X("label:N", title=None, sort=order, axis=alt.Axis(labelAngle=0)))
    bars = base.mark_bar(cornerRadiusTopLeft=4, cornerRadiusTopRight=4).encode(
        y=alt.Y("count:Q", title="展覧会数（回）", axis=alt.Axis(tickMinStep=5)),
        color=alt.condition(hover, alt.value(BAR_HOVER_COLOR), alt.value(BAR_COLOR)),
        tooltip=[
            alt.Tooltip("label:N", title="期間"),
            alt.Tooltip("count:Q", title="5年間の合計開催数"),
        ],
    ).add_params(hover)
    line = base.mark_line(point=True, color=LINE_COLOR, interpolate="monotone").encode(
        y=alt.Y("yearly_average:Q"),
        tooltip=[
            alt.Tooltip("label:N", title="期間"),
            alt.Tooltip("yearly_average:Q", title="年平均開催数", format=".1f"),
        ],
    )
    return alt.layer(bars, line).properties(height=300)


def region_chart(regions: pd.DataFrame, prefecture_count: int) -> alt.LayerChart:
    """Donut of region shares with the number of prefectures in the middle."""
    order = regions["region"].tolist()
    arc = (
        alt.Chart(regions.assign(position=range(len(regions))))
        .mark_arc(innerRadius=90, outerRadius=120, stroke="#ffffff", strokeWidth=2)
        .encode(
            theta=alt.Theta("count:Q", stack=True),
            order=alt.Order("position:Q"),
            color=alt.Color(
                "region:N",
                title=None,
                sort=order,
                scale=alt.Scale(domain=order, range=REGION_PALETTE),
                legend=alt.Legend(orient="right"),
            ),
            tooltip=[alt.Tooltip("region:N", title="地方"), alt.Tooltip("count:Q", title="開催数")],
        )
    )
    headline = (
        alt.Chart(pd.DataFrame({"text": [f"{prefecture_count}都道府県"]}))
        .mark_text(dy=-10, fontSize=28, fontWeight="bold", color="#615c57")
        .encode(text="text:N")
    )
    caption = (
        alt.Chart(pd.DataFrame({"text": ["で開催"]}))
        .mark_text(dy=24, fontSize=18, fontWeight="bold", color="#a8a29e")
        .encode(text="text:N")
    )
    return alt.layer(arc, headline, caption).properties(height=300)
