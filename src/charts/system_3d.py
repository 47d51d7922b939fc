"""
3D System View
==============

Generators, transformer, distribution and load center placed in 3D,
with a view state driven by the zoom / rotate / reset controls.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Tuple

import plotly.graph_objects as go

from telemetry.power_flow import PowerFlow

ZOOM_STEP = 0.2
MIN_ZOOM = 0.5
MAX_ZOOM = 3.0
RADIANS_PER_UNIT = 0.01

BASE_DISTANCE = 2.0
BASE_ELEVATION = 1.2

# kW at which a component is drawn fully opaque
FULL_SCALE_KW = 500.0

CONNECTIONS: List[Tuple[str, str]] = [
    ("Generator 1", "Transformer"),
    ("Generator 2", "Transformer"),
    ("Transformer", "Distribution"),
    ("Transformer", "Load Center"),
]


@dataclass(frozen=True)
class SystemComponent:
    """
    Equipment marker in the 3D view.

    Attributes:
        name: Display name
        x, y, z: Position in view units
        size: Marker size
        color: Marker color
        value_kw: Power through the component (kW)
    """
    name: str
    x: float
    y: float
    z: float
    size: float
    color: str
    value_kw: float

    @property
    def intensity(self) -> float:
        return min(max(self.value_kw, 0.0) / FULL_SCALE_KW, 1.0)

    @property
    def opacity(self) -> float:
        return 0.3 + self.intensity * 0.7


def system_components(flow: PowerFlow) -> List[SystemComponent]:
    """Components for the current flow, ordered back to front (by z)."""
    components = [
        SystemComponent("Generator 1", -100, -50, 0, 20, "#3b82f6", flow.generation_kw * 0.6),
        SystemComponent("Generator 2", -100, 50, 0, 20, "#3b82f6", flow.generation_kw * 0.4),
        SystemComponent("Transformer", 0, 0, 10, 15, "#10b981", flow.transmission_kw),
        SystemComponent("Distribution", 100, -30, 0, 12, "#f59e0b", flow.distribution_kw),
        SystemComponent("Load Center", 100, 30, 0, 12, "#ef4444", flow.consumption_kw),
    ]
    return sorted(components, key=lambda c: c.z)


@dataclass
class ViewState:
    """Rotation (radians) and zoom of the 3D view."""
    rotation_x: float = 0.0
    rotation_y: float = 0.0
    zoom: float = 1.0

    def rotate(self, dx: float, dy: float) -> None:
        """Horizontal drag turns about the vertical axis, vertical drag tilts."""
        self.rotation_x += dy * RADIANS_PER_UNIT
        self.rotation_y += dx * RADIANS_PER_UNIT

    def zoom_in(self) -> None:
        self.zoom = round(min(self.zoom + ZOOM_STEP, MAX_ZOOM), 2)

    def zoom_out(self) -> None:
        self.zoom = round(max(self.zoom - ZOOM_STEP, MIN_ZOOM), 2)

    def reset(self) -> None:
        self.rotation_x = 0.0
        self.rotation_y = 0.0
        self.zoom = 1.0

    def revision(self) -> str:
        return f"{self.rotation_x:.3f}:{self.rotation_y:.3f}:{self.zoom:.2f}"


def camera_eye(view: ViewState) -> Dict[str, float]:
    """
    Camera position for the view state.

    Zooming in moves the camera closer; elevation is kept off the poles.
    """
    distance = BASE_DISTANCE / view.zoom
    limit = math.pi / 2 - 0.05
    elevation = min(max(BASE_ELEVATION + view.rotation_x, -limit), limit)
    azimuth = -math.pi / 2 + view.rotation_y
    return {
        "x": distance * math.cos(elevation) * math.cos(azimuth),
        "y": distance * math.cos(elevation) * math.sin(azimuth),
        "z": distance * math.sin(elevation),
    }


def _grid_lines(extent: float = 150.0, step: float = 30.0) -> Tuple[list, list, list]:
    xs, ys, zs = [], [], []
    n = int(extent // step)
    for i in range(-n, n + 1):
        offset = i * step
        xs += [-extent, extent, None, offset, offset, None]
        ys += [offset, offset, None, -extent, extent, None]
        zs += [0, 0, None, 0, 0, None]
    return xs, ys, zs


def system_figure(flow: PowerFlow, view: ViewState) -> go.Figure:
    components = system_components(flow)
    by_name = {c.name: c for c in components}

    fig = go.Figure()

    gx, gy, gz = _grid_lines()
    fig.add_trace(go.Scatter3d(
        x=gx, y=gy, z=gz,
        mode='lines',
        line=dict(color="#e2e8f0", width=1),
        hoverinfo='skip',
        showlegend=False
    ))

    for src, dst in CONNECTIONS:
        a, b = by_name[src], by_name[dst]
        fig.add_trace(go.Scatter3d(
            x=[a.x, b.x], y=[a.y, b.y], z=[a.z, b.z],
            mode='lines',
            line=dict(color="#6b7280", width=4),
            opacity=0.6,
            hoverinfo='skip',
            showlegend=False
        ))

    for c in components:
        fig.add_trace(go.Scatter3d(
            x=[c.x], y=[c.y], z=[c.z],
            mode='markers+text',
            marker=dict(size=c.size, color=c.color, opacity=c.opacity,
                        line=dict(color=c.color, width=2)),
            text=[f"{c.name}<br>{c.value_kw:.1f} kW"],
            textposition='top center',
            name=c.name,
            hovertemplate=f"<b>{c.name}</b><br>{c.value_kw:.1f} kW<extra></extra>"
        ))

    hidden = dict(visible=False, showbackground=False)
    fig.update_layout(
        height=384,
        margin=dict(l=0, r=0, t=0, b=0),
        showlegend=False,
        uirevision=view.revision(),
        scene=dict(
            xaxis=hidden,
            yaxis=hidden,
            zaxis=hidden,
            aspectmode='manual',
            aspectratio=dict(x=1, y=1, z=0.3),
            camera=dict(eye=camera_eye(view))
        )
    )
    return fig
