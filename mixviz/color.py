"""Colour scale selection and colour domain calculation."""

from typing import Optional, Sequence, Tuple

import numpy as np

from .normalizer import resolve_number

COLOR_SCALES = [
    'Viridis', 'Cividis', 'Plasma', 'Inferno', 'Magma', 'Turbo',
    'Jet', 'Hot', 'Earth', 'Electric', 'Rainbow',
]

DEFAULT_COLOR_SCALE = 'Viridis'

# Domain used when no point survives, so the colour bar stays well-defined
EMPTY_DOMAIN = (0.0, 1.0)


def parse_override(text) -> Optional[float]:
    """Parse a user-entered colour bound. Blank or invalid text means no override."""
    return resolve_number(text)


def color_domain(
    performance_values: Sequence[float],
    override_min: str = '',
    override_max: str = '',
) -> Tuple[float, float]:
    """Colour range for the performance values of the accepted points.

    A parseable override wins for its bound. Inconsistent overrides
    (min > max) are passed through unchanged.
    """
    if len(performance_values) > 0:
        data_min = float(np.min(performance_values))
        data_max = float(np.max(performance_values))
    else:
        data_min, data_max = EMPTY_DOMAIN

    cmin = parse_override(override_min)
    cmax = parse_override(override_max)
    return (
        data_min if cmin is None else cmin,
        data_max if cmax is None else cmax,
    )


def resolve_colorscale(name: str, reverse: bool = False) -> str:
    """Plotly colorscale name, with the ``_r`` suffix when reversed."""
    if name not in COLOR_SCALES:
        name = DEFAULT_COLOR_SCALE
    return name + '_r' if reverse else name
