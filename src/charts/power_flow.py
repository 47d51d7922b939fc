"""
Power Flow Diagram
==================

Left-to-right diagram of the four power flow stages. Node shading
scales with the power passing through each stage.
"""

from typing import Dict

import plotly.graph_objects as go

from telemetry.power_flow import PowerFlow, Stage

FLOW_COLOR = "#3b82f6"
NODE_X: Dict[Stage, float] = {
    Stage.GENERATION: 0.0,
    Stage.TRANSMISSION: 0.35,
    Stage.DISTRIBUTION: 0.65,
    Stage.CONSUMPTION: 1.0,
}
# kW at which a node is drawn fully opaque
FULL_SCALE_KW = 1000.0


def flow_intensity(kw: float) -> float:
    return min(max(kw, 0.0) / FULL_SCALE_KW, 1.0)


def node_opacity(kw: float) -> float:
    return 0.2 + flow_intensity(kw) * 0.8


def _rgba(alpha: float) -> str:
    return f"rgba(59, 130, 246, {alpha:.3f})"


def power_flow_figure(flow: PowerFlow, detailed: bool = False) -> go.Figure:
    """Build the stage diagram; the detailed variant adds the overall efficiency."""
    values = flow.stage_values()
    stages = list(Stage)

    fig = go.Figure()

    # Connectors with a flow marker at the midpoint
    for upstream, downstream in zip(stages, stages[1:]):
        x0, x1 = NODE_X[upstream], NODE_X[downstream]
        fig.add_trace(go.Scatter(
            x=[x0, x1], y=[0, 0],
            mode='lines',
            line=dict(color=FLOW_COLOR, width=3),
            hoverinfo='skip',
            showlegend=False
        ))
        fig.add_trace(go.Scatter(
            x=[(x0 + x1) / 2], y=[0],
            mode='markers',
            marker=dict(size=8, color=_rgba(flow_intensity(values[upstream]))),
            hoverinfo='skip',
            showlegend=False
        ))

    # Stage nodes
    for stage in stages:
        kw = values[stage]
        fig.add_trace(go.Scatter(
            x=[NODE_X[stage]], y=[0],
            mode='markers',
            marker=dict(size=50, color=_rgba(node_opacity(kw)), line=dict(color=FLOW_COLOR, width=2)),
            name=stage.label,
            hovertemplate=f"<b>{stage.label}</b><br>{kw:.1f} kW<extra></extra>",
            showlegend=False
        ))
        fig.add_annotation(x=NODE_X[stage], y=0.55, text=stage.label, showarrow=False,
                           font=dict(size=12, color="#1e293b"))
        fig.add_annotation(x=NODE_X[stage], y=-0.55, text=f"<b>{kw:.1f} kW</b>", showarrow=False,
                           font=dict(size=11, color="#1e293b"))

    if detailed:
        fig.add_annotation(
            x=0.5, y=-0.9,
            text=f"Overall Efficiency: {flow.overall_efficiency:.1f}%",
            showarrow=False,
            font=dict(size=12, color="#10b981")
        )

    fig.update_layout(
        height=260,
        margin=dict(l=10, r=10, t=10, b=10),
        plot_bgcolor="white",
        xaxis=dict(visible=False, range=[-0.15, 1.15]),
        yaxis=dict(visible=False, range=[-1.0, 1.0])
    )
    return fig


def stage_losses_figure(flow: PowerFlow) -> go.Figure:
    """Power lost entering each downstream stage."""
    losses = flow.losses()
    labels = [stage.label for stage in losses]
    kw = list(losses.values())

    fig = go.Figure(data=[
        go.Bar(
            x=labels,
            y=kw,
            text=[f"{v:.2f} kW" for v in kw],
            textposition='outside',
            marker_color='#ef4444'
        )
    ])
    fig.update_layout(
        title="Losses by stage",
        xaxis_title="Stage",
        yaxis_title="Loss (kW)",
        height=300
    )
    return fig
