import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots


def trend_figure(frame: pd.DataFrame) -> go.Figure:
    """Recent generation / consumption (kW) with overall efficiency (%) on a second axis."""
    fig = make_subplots(specs=[[{"secondary_y": True}]])

    if frame.empty:
        fig.add_annotation(text="Waiting for data", x=0.5, y=0.5, xref="paper", yref="paper",
                           showarrow=False)
        fig.update_layout(height=280)
        return fig

    fig.add_trace(
        go.Scatter(x=frame["timestamp"], y=frame["generation_kw"], name='Generation (kW)',
                   line=dict(color='#3b82f6', width=2)),
        secondary_y=False
    )
    fig.add_trace(
        go.Scatter(x=frame["timestamp"], y=frame["consumption_kw"], name='Consumption (kW)',
                   line=dict(color='#ef4444', width=2)),
        secondary_y=False
    )
    fig.add_trace(
        go.Scatter(x=frame["timestamp"], y=frame["overall_efficiency_pct"], name='Efficiency (%)',
                   line=dict(color='#10b981', dash='dot')),
        secondary_y=True
    )

    fig.update_layout(
        height=280,
        legend=dict(orientation="h", yanchor="bottom", y=1.02)
    )
    fig.update_yaxes(title_text="Power (kW)", secondary_y=False)
    fig.update_yaxes(title_text="Efficiency (%)", range=[0, 100], secondary_y=True)
    fig.update_xaxes(title_text="Time")
    return fig
