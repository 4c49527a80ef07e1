"""Fixed-value constraints on composition members that are not plotted."""

from typing import Dict, Mapping, Optional, Sequence, Tuple

import pandas as pd

from .normalizer import pool_shares

# 0.5 percentage points of composition
DEFAULT_TOLERANCE = 0.005


def passes(
    pool_coordinates: Mapping[str, float],
    constraints: Mapping[str, Optional[float]],
    tolerance: float = DEFAULT_TOLERANCE,
) -> bool:
    """Check a row's normalized pool values against every constraint target.

    A field with no normalized value, or a constraint with no target, fails the row.
    So does any NaN among value, target and tolerance.
    """
    for field, target in constraints.items():
        value = pool_coordinates.get(field)
        if value is None or target is None:
            return False
        if not abs(value - target) <= tolerance:
            return False
    return True


def constraint_ranges(
    data: pd.DataFrame,
    pool_fields: Sequence[str],
    fields: Sequence[str],
) -> Dict[str, Tuple[float, float]]:
    """Observed normalized (min, max) of each field over rows with a valid pool total.

    Fields outside the pool or with no valid observation are left out.
    """
    if not pool_fields or data is None or len(data) == 0:
        return {}

    shares = pool_shares(data, pool_fields)
    if shares.empty:
        return {}

    return {
        field: (float(shares[field].min()), float(shares[field].max()))
        for field in fields
        if field in shares.columns
    }


def default_targets(
    ranges: Mapping[str, Tuple[float, float]],
    fields: Sequence[str],
    current: Mapping[str, float],
) -> Dict[str, float]:
    """Keep existing targets and start new constraints at the middle of their range."""
    targets = {}
    for field in fields:
        if field not in ranges:
            continue
        if current.get(field) is not None:
            targets[field] = current[field]
        else:
            low, high = ranges[field]
            targets[field] = (low + high) / 2
    return targets
