"""Build plot geometry from a dataset and the current field selection.

Every call recomputes from scratch: normalize each row, apply the optional
fixed-value constraints, compute the colour domain, order the points for
3D drawing, project them and assemble the plotly traces and layout.
"""

from collections import Counter
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import plotly.graph_objects as go
from plotly.basedatatypes import BaseTraceType

from .color import DEFAULT_COLOR_SCALE, color_domain, resolve_colorscale
from .constraints import DEFAULT_TOLERANCE, passes
from .formatter import axis_title, hover_label
from .interpolation import interpolate_ternary
from .logger import get_logger
from .normalizer import Rejected, normalize_frame
from .ordering import DEFAULT_DRAW_ORDER, sort_points
from .projection import (
    PARALLEL,
    TERNARY,
    TETRAHEDRAL,
    TETRAHEDRON_VERTICES,
    project,
    projection_mode,
    tetrahedron_mesh,
)

logger = get_logger(__name__)

REJECT_CONSTRAINT = 'constraint mismatch'

PLOT_HEIGHT = 600

DEFAULT_MARKER_SIZES = {TERNARY: 12, TETRAHEDRAL: 4}


class SelectionConfig(NamedTuple):
    """Fields bound to plot roles. Empty strings mark unselected component slots."""
    component_fields: Tuple[str, ...] = ()
    performance_field: str = ''
    pool_fields: Tuple[str, ...] = ()
    constraints: Optional[Dict[str, float]] = None
    tolerance: float = DEFAULT_TOLERANCE


class RenderOptions(NamedTuple):
    colorscale: str = DEFAULT_COLOR_SCALE
    reverse_colorscale: bool = False
    cmin: str = ''
    cmax: str = ''
    draw_order: str = DEFAULT_DRAW_ORDER
    marker_size: Optional[int] = None
    marker_opacity: float = 0.8
    height: int = PLOT_HEIGHT
    auto_subscript: bool = True
    interpolate: bool = False
    interpolation_resolution: int = 50
    interpolation_method: str = 'linear'


class NormalizedPoint(NamedTuple):
    coordinates: Tuple[float, ...]
    performance: float
    label: str


class RenderGeometry(NamedTuple):
    mode: str
    traces: List[BaseTraceType]
    layout: Dict
    points: List[NormalizedPoint]
    render_coordinates: np.ndarray
    color_domain: Tuple[float, float]
    component_fields: Tuple[str, ...]
    performance_field: str
    row_count: int


def check_selection(selection: SelectionConfig, fields: Sequence[str]) -> Optional[str]:
    """Return why the selection cannot be plotted against these fields, or None if it can."""
    components = list(selection.component_fields)
    pool = list(selection.pool_fields)
    constraint_fields = list(selection.constraints or {})

    if len(components) < 3:
        return "At least three component fields are required"
    if not all(components):
        return "Select a field for every component"
    if len(set(components)) != len(components):
        return "Component fields must be distinct"
    if not selection.performance_field:
        return "Select a performance field"

    referenced = components + [selection.performance_field] + pool + constraint_fields
    unknown = [field for field in referenced if field not in fields]
    if unknown:
        return f"Unknown field(s): {', '.join(unknown)}"

    if selection.performance_field in components or selection.performance_field in pool:
        return "The performance field cannot also be a component"
    if pool and not set(components) <= set(pool):
        return "Component fields must be part of the component pool"
    return None


def collect_points(data, selection: SelectionConfig) -> Tuple[List[NormalizedPoint], Counter]:
    """Normalize and filter rows. Returns the accepted points and a tally of rejection reasons.

    ``data`` is a DataFrame or a sequence of row mappings.
    """
    if not isinstance(data, pd.DataFrame):
        data = pd.DataFrame.from_records(list(data))
    components = list(selection.component_fields)
    pool = list(selection.pool_fields) or None
    constraints = selection.constraints or {}

    points = []
    rejections = Counter()
    for result in normalize_frame(data, components, selection.performance_field, pool):
        if isinstance(result, Rejected):
            rejections[result.reason] += 1
            continue
        if constraints and not passes(result.pool_coordinates, constraints, selection.tolerance):
            rejections[REJECT_CONSTRAINT] += 1
            continue
        label = hover_label(components, result.coordinates, selection.performance_field, result.performance)
        points.append(NormalizedPoint(result.coordinates, result.performance, label))
    return points, rejections


def build(
    data: pd.DataFrame,
    selection: SelectionConfig,
    options: RenderOptions = None,
) -> Optional[RenderGeometry]:
    """Build the plot geometry, or None when there is nothing to plot."""
    if options is None:
        options = RenderOptions()
    if data is None or len(data) == 0:
        return None

    reason = check_selection(selection, list(data.columns))
    if reason:
        logger.debug("Nothing to plot: %s", reason)
        return None

    components = tuple(selection.component_fields)
    mode = projection_mode(len(components))
    points, rejections = collect_points(data, selection)
    logger.debug(
        "Accepted %d of %d rows (%s)",
        len(points), len(data),
        ', '.join(f"{cause}: {count}" for cause, count in rejections.items()) or 'none rejected',
    )

    domain = color_domain([point.performance for point in points], options.cmin, options.cmax)

    if mode == TETRAHEDRAL:
        points = sort_points(points, options.draw_order)

    coords = np.array([point.coordinates for point in points], dtype=float).reshape(len(points), len(components))
    render_coordinates = project(coords, mode)

    builder = _TRACE_BUILDERS[mode]
    traces, layout = builder(points, render_coordinates, selection, options, domain)

    return RenderGeometry(
        mode=mode,
        traces=traces,
        layout=layout,
        points=points,
        render_coordinates=render_coordinates,
        color_domain=domain,
        component_fields=components,
        performance_field=selection.performance_field,
        row_count=len(data),
    )


def make_figure(geometry: RenderGeometry) -> go.Figure:
    fig = go.Figure(data=geometry.traces)
    fig.update_layout(**geometry.layout)
    return fig


def points_dataframe(geometry: RenderGeometry) -> pd.DataFrame:
    """Accepted points as normalized compositions plus performance, in plotted order."""
    frame = pd.DataFrame(
        [point.coordinates for point in geometry.points],
        columns=list(geometry.component_fields),
    )
    frame[geometry.performance_field] = [point.performance for point in geometry.points]
    return frame


def _marker_size(options: RenderOptions, mode: str) -> int:
    if options.marker_size is None:
        return DEFAULT_MARKER_SIZES[mode]
    return options.marker_size


def _colorbar(performance_field: str) -> Dict:
    return dict(title=dict(text=performance_field))


def _color_marker(points, options: RenderOptions, domain) -> Dict:
    return dict(
        color=[point.performance for point in points],
        colorscale=resolve_colorscale(options.colorscale, options.reverse_colorscale),
        cmin=domain[0],
        cmax=domain[1],
        showscale=True,
    )


def _ternary_axis(title: str) -> Dict:
    return dict(
        title=dict(text=title),
        min=0,
        linewidth=2,
        linecolor='black',
        gridcolor='gray',
        tick0=0,
        dtick=0.2,
        ticks='outside',
    )


def _ternary_traces(points, render_coordinates, selection, options, domain):
    components = selection.component_fields
    traces = []

    if options.interpolate and len(points) > 3:
        heatmap = interpolate_ternary(
            render_coordinates,
            [point.performance for point in points],
            resolution=options.interpolation_resolution,
            method=options.interpolation_method,
        )
        if heatmap is not None:
            grid, z_interp = heatmap
            traces.append(go.Scatterternary(
                a=grid[:, 0],
                b=grid[:, 1],
                c=grid[:, 2],
                mode='markers',
                marker=dict(
                    size=_marker_size(options, TERNARY),
                    color=z_interp,
                    colorscale=resolve_colorscale(options.colorscale, options.reverse_colorscale),
                    cmin=domain[0],
                    cmax=domain[1],
                    showscale=False,
                    opacity=0.6,
                    symbol='hexagon2',
                ),
                hoverinfo='skip',
                showlegend=False,
            ))

    marker = _color_marker(points, options, domain)
    marker.update(
        size=_marker_size(options, TERNARY),
        opacity=options.marker_opacity,
        line=dict(color='#000000', width=1),
        colorbar=_colorbar(selection.performance_field),
    )
    traces.append(go.Scatterternary(
        a=render_coordinates[:, 0],
        b=render_coordinates[:, 1],
        c=render_coordinates[:, 2],
        mode='markers',
        marker=marker,
        text=[point.label for point in points],
        hoverinfo='text',
        showlegend=False,
    ))

    titles = [axis_title(field, options.auto_subscript) for field in components]
    layout = dict(
        ternary=dict(
            sum=1,
            aaxis=_ternary_axis(titles[0]),
            baxis=_ternary_axis(titles[1]),
            caxis=_ternary_axis(titles[2]),
            bgcolor='white',
        ),
        height=options.height,
        paper_bgcolor='white',
        margin=dict(l=60, r=60, t=60, b=60),
        title=dict(text=' / '.join(titles)),
    )
    return traces, layout


def _tetrahedral_traces(points, render_coordinates, selection, options, domain):
    components = selection.component_fields

    marker = _color_marker(points, options, domain)
    marker.update(
        size=_marker_size(options, TETRAHEDRAL),
        opacity=options.marker_opacity,
        colorbar=_colorbar(selection.performance_field),
    )
    scatter = go.Scatter3d(
        x=render_coordinates[:, 0],
        y=render_coordinates[:, 1],
        z=render_coordinates[:, 2],
        mode='markers',
        marker=marker,
        text=[point.label for point in points],
        hoverinfo='text',
        showlegend=False,
    )

    titles = [axis_title(field, options.auto_subscript) for field in components]
    vertex_labels = [
        dict(x=x, y=y, z=z, text=title, showarrow=False, yshift=12)
        for (x, y, z), title in zip(TETRAHEDRON_VERTICES, titles)
    ]
    axis = dict(showgrid=False, zeroline=False)
    layout = dict(
        scene=dict(
            xaxis=dict(title=dict(text='X'), **axis),
            yaxis=dict(title=dict(text='Y'), **axis),
            zaxis=dict(title=dict(text='Z'), **axis),
            aspectmode='data',
            annotations=vertex_labels,
        ),
        margin=dict(l=0, r=0, b=0, t=30),
        height=options.height,
        title=dict(text=f"{' / '.join(titles)} Tetrahedron"),
    )
    return [tetrahedron_mesh(), scatter], layout


def _parallel_traces(points, render_coordinates, selection, options, domain):
    components = selection.component_fields

    line = _color_marker(points, options, domain)
    line['colorbar'] = _colorbar(selection.performance_field)
    dimensions = [
        dict(
            label=field,
            values=render_coordinates[:, index],
            range=[0, 1],
        )
        for index, field in enumerate(components[:-1])
    ]
    trace = go.Parcoords(line=line, dimensions=dimensions)

    layout = dict(
        height=options.height,
        margin=dict(l=60, r=60, t=80, b=40),
        title=dict(text=f"{' / '.join(components)} ({components[-1]} implied by the others)"),
    )
    return [trace], layout


_TRACE_BUILDERS = {
    TERNARY: _ternary_traces,
    TETRAHEDRAL: _tetrahedral_traces,
    PARALLEL: _parallel_traces,
}
