"""Session state for the field selection and plot settings.

``state`` is any mutable mapping: ``st.session_state`` in the app, a plain
dict in tests. Setters replace values and only coerce types; whether the
selection is plottable is decided by ``pipeline.check_selection``.
"""

import copy
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from .color import COLOR_SCALES, DEFAULT_COLOR_SCALE
from .constraints import DEFAULT_TOLERANCE, constraint_ranges, default_targets
from .logger import get_logger
from .normalizer import resolve_number
from .ordering import DEFAULT_DRAW_ORDER
from .pipeline import RenderOptions, SelectionConfig

logger = get_logger(__name__)

MIN_COMPONENTS = 3

DEFAULT_SELECTION = {
    'component_fields': ['', '', ''],
    'performance_field': '',
    'pool_fields': [],
    'constraint_fields': [],
    'constraint_targets': {},
    'tolerance': DEFAULT_TOLERANCE,
}

DEFAULT_PLOT_SETTINGS = {
    # Colorscale
    'colorscale': DEFAULT_COLOR_SCALE,
    'reverse_colorscale': False,

    # Colour range overrides (blank = from data)
    'cmin': '',
    'cmax': '',

    # 3D draw order
    'draw_order': DEFAULT_DRAW_ORDER,

    # Markers (None = per-plot default)
    'marker_size': None,
    'marker_opacity': 0.8,

    # Axis labels
    'auto_subscript': True,

    # Ternary interpolation
    'interpolate': False,
    'interpolation_resolution': 50,
    'interpolation_method': 'linear',
}


def initialize_session_state(state) -> None:
    """Install default values for any missing session keys."""
    if 'data' not in state:
        state['data'] = pd.DataFrame()

    if 'fields' not in state:
        state['fields'] = []

    if 'uploaded_file_name' not in state:
        state['uploaded_file_name'] = None

    if 'selection' not in state:
        state['selection'] = copy.deepcopy(DEFAULT_SELECTION)

    if 'plot_settings' not in state:
        state['plot_settings'] = dict(DEFAULT_PLOT_SETTINGS)


def load_dataset(state, data: pd.DataFrame, fields: Sequence[str], file_name: Optional[str] = None) -> None:
    """Replace the dataset and clear every field selection.

    Selections refer to fields by name, so none of them may survive a new dataset.
    """
    state['data'] = data
    state['fields'] = list(fields)
    state['uploaded_file_name'] = file_name
    state['selection'] = copy.deepcopy(DEFAULT_SELECTION)
    logger.info("Loaded dataset %s: %d rows, %d fields", file_name or '(sample)', len(data), len(fields))


# ── Getters / setters ────────────────────────────────────────────────────

def get_component_fields(state) -> List[str]:
    return list(state['selection']['component_fields'])


def set_component_fields(state, fields: Sequence[Optional[str]]) -> None:
    state['selection']['component_fields'] = [str(field) if field else '' for field in fields]


def set_component_count(state, count: int) -> None:
    """Resize the component slots, keeping the leading selections."""
    count = max(int(count), MIN_COMPONENTS)
    current = get_component_fields(state)
    set_component_fields(state, (current + [''] * count)[:count])


def get_performance_field(state) -> str:
    return state['selection']['performance_field']


def set_performance_field(state, field: Optional[str]) -> None:
    state['selection']['performance_field'] = str(field) if field else ''


def get_component_pool(state) -> List[str]:
    return list(state['selection']['pool_fields'])


def set_component_pool(state, fields: Sequence[str]) -> None:
    state['selection']['pool_fields'] = _unique(fields)


def get_constraint_fields(state) -> List[str]:
    return list(state['selection']['constraint_fields'])


def set_constraint_fields(state, fields: Sequence[str]) -> None:
    state['selection']['constraint_fields'] = _unique(fields)


def get_constraint_targets(state) -> Dict[str, float]:
    return dict(state['selection']['constraint_targets'])


def set_constraint_target(state, field: str, value: float) -> None:
    """Store a target; a value that is not a finite number leaves the target unchanged."""
    target = resolve_number(value)
    if target is not None:
        state['selection']['constraint_targets'][str(field)] = target


def get_tolerance(state) -> float:
    return state['selection']['tolerance']


def set_tolerance(state, tolerance: float) -> None:
    state['selection']['tolerance'] = float(tolerance)


def get_colorscale(state) -> str:
    return state['plot_settings']['colorscale']


def set_colorscale(state, name: str) -> None:
    if name in COLOR_SCALES:
        state['plot_settings']['colorscale'] = name


def get_color_overrides(state) -> Tuple[str, str]:
    settings = state['plot_settings']
    return settings['cmin'], settings['cmax']


def set_color_overrides(state, cmin: Optional[str], cmax: Optional[str]) -> None:
    state['plot_settings']['cmin'] = '' if cmin is None else str(cmin)
    state['plot_settings']['cmax'] = '' if cmax is None else str(cmax)


def get_draw_order(state) -> str:
    return state['plot_settings']['draw_order']


def set_draw_order(state, mode: str) -> None:
    state['plot_settings']['draw_order'] = 'high' if mode == 'high' else 'low'


def _unique(fields: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(str(field) for field in fields if field))


# ── Derived state ────────────────────────────────────────────────────────

def reconcile_selection(state) -> Dict[str, Tuple[float, float]]:
    """Bring dependent selections in line after any change.

    - the performance field leaves the pool and the constraint fields
    - with a pool configured, component slots outside it are cleared
    - constraint fields must be pool members that are not plotted
    - new constraint fields get a target in the middle of their observed range

    Returns:
        Observed normalized (min, max) for each remaining constraint field
    """
    selection = state['selection']
    performance = selection['performance_field']

    pool = [field for field in selection['pool_fields'] if field != performance]
    selection['pool_fields'] = pool

    components = [
        field if field and field != performance and (not pool or field in pool) else ''
        for field in selection['component_fields']
    ]
    selection['component_fields'] = components

    constraint_fields = [
        field for field in selection['constraint_fields']
        if field in pool and field not in components
    ]
    selection['constraint_fields'] = constraint_fields

    ranges = constraint_ranges(state['data'], pool, constraint_fields)
    selection['constraint_targets'] = default_targets(ranges, constraint_fields, selection['constraint_targets'])
    return ranges


def selection_from_state(state) -> SelectionConfig:
    selection = state['selection']
    targets = selection['constraint_targets']
    constraints = {field: targets.get(field) for field in selection['constraint_fields']}
    return SelectionConfig(
        component_fields=tuple(selection['component_fields']),
        performance_field=selection['performance_field'],
        pool_fields=tuple(selection['pool_fields']),
        constraints=constraints or None,
        tolerance=selection['tolerance'],
    )


def render_options_from_state(state) -> RenderOptions:
    settings = state['plot_settings']
    return RenderOptions(**{key: settings[key] for key in RenderOptions._fields if key in settings})
