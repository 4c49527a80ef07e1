"""Compositional mixture plotting: normalization, projection and plot assembly."""

from .formatter import subscript_num_html, hover_label
from .data_loader import parse_uploaded_file, get_sample_data
from .normalizer import normalize_row, normalize_frame, resolve_number, NormalizedRow, Rejected
from .constraints import passes, constraint_ranges, default_targets, DEFAULT_TOLERANCE
from .projection import projection_mode, project, TETRAHEDRON_VERTICES, TETRAHEDRON_FACES
from .color import color_domain, parse_override, COLOR_SCALES
from .ordering import sort_points, DRAW_ORDERS
from .pipeline import build, make_figure, points_dataframe, SelectionConfig, RenderOptions, RenderGeometry

__all__ = [
    'subscript_num_html',
    'hover_label',
    'parse_uploaded_file',
    'get_sample_data',
    'normalize_row',
    'normalize_frame',
    'resolve_number',
    'NormalizedRow',
    'Rejected',
    'passes',
    'constraint_ranges',
    'default_targets',
    'DEFAULT_TOLERANCE',
    'projection_mode',
    'project',
    'TETRAHEDRON_VERTICES',
    'TETRAHEDRON_FACES',
    'color_domain',
    'parse_override',
    'COLOR_SCALES',
    'sort_points',
    'DRAW_ORDERS',
    'build',
    'make_figure',
    'points_dataframe',
    'SelectionConfig',
    'RenderOptions',
    'RenderGeometry',
]
