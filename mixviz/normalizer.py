"""Row normalization into barycentric (simplex) coordinates."""

from typing import Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

REJECT_NON_NUMERIC = 'non-numeric component'
REJECT_NEGATIVE = 'negative component'
REJECT_NON_POSITIVE_TOTAL = 'non-positive total'
REJECT_NON_NUMERIC_PERFORMANCE = 'non-numeric performance'


class NormalizedRow(NamedTuple):
    """A row accepted by the normalizer.

    ``coordinates`` follows the order of the component fields. ``pool_coordinates``
    maps every field of the normalization basis to its share of the total.
    """
    coordinates: Tuple[float, ...]
    performance: float
    pool_coordinates: Dict[str, float]


class Rejected(NamedTuple):
    reason: str


def coerce_numeric(values) -> pd.Series:
    """Coerce raw cell values to finite floats, NaN where a cell has no number.

    Columns pandas did not type as numeric are parsed as stripped text, so
    booleans, oversized integers and junk all become NaN like any unparsable cell.
    """
    series = values if isinstance(values, pd.Series) else pd.Series(values)
    if series.dtype == object or pd.api.types.is_bool_dtype(series):
        series = series.astype(str).str.strip()
    numbers = pd.to_numeric(series, errors='coerce').astype(float)
    return numbers.where(np.isfinite(numbers))


def resolve_number(value) -> Optional[float]:
    """Coerce a single raw value to a finite float, or None if it has none."""
    number = coerce_numeric(pd.Series([value], dtype=object)).iloc[0]
    if pd.isna(number):
        return None
    return float(number)


def numeric_columns(data: pd.DataFrame, fields: Sequence[str]) -> pd.DataFrame:
    """Coerced copy of the named columns; a field missing from the data is all NaN."""
    return pd.DataFrame(
        {
            field: coerce_numeric(data[field]) if field in data.columns else np.nan
            for field in dict.fromkeys(fields)
        },
        index=data.index,
    )


def normalize_frame(
    data: pd.DataFrame,
    component_fields: Sequence[str],
    performance_field: str,
    pool_fields: Optional[Sequence[str]] = None,
) -> List[Union[NormalizedRow, Rejected]]:
    """Normalize every row's component values by the pool (or component) total.

    Args:
        data: Dataset with one row per sample
        component_fields: Ordered simplex axes
        performance_field: Field holding the response value
        pool_fields: Fields summed for the denominator; defaults to the components

    Returns:
        One NormalizedRow or Rejected (with the reason) per row, in dataset order.
        Never raises for bad data.
    """
    components = list(component_fields)
    basis = list(pool_fields) if pool_fields else components

    data = data.reset_index(drop=True)
    values = numeric_columns(data, components + basis)
    performance = numeric_columns(data, [performance_field])[performance_field]
    total = values[basis].sum(axis=1)

    reasons = np.select(
        [
            values.isna().any(axis=1),
            (values < 0).any(axis=1),
            total <= 0,
            performance.isna(),
        ],
        [
            REJECT_NON_NUMERIC,
            REJECT_NEGATIVE,
            REJECT_NON_POSITIVE_TOTAL,
            REJECT_NON_NUMERIC_PERFORMANCE,
        ],
        default='',
    )
    shares = values.div(total.where(total > 0), axis=0).to_dict('records')

    results = []
    for reason, share, perf in zip(reasons, shares, performance):
        if reason:
            results.append(Rejected(str(reason)))
            continue
        coordinates = tuple(share[field] for field in components)
        pool_coordinates = {field: share[field] for field in basis}
        results.append(NormalizedRow(coordinates, float(perf), pool_coordinates))
    return results


def normalize_row(
    row: Mapping,
    component_fields: Sequence[str],
    performance_field: str,
    pool_fields: Optional[Sequence[str]] = None,
) -> Union[NormalizedRow, Rejected]:
    """Normalize one row mapping. See ``normalize_frame``."""
    data = pd.DataFrame({field: pd.Series([value], dtype=object) for field, value in row.items()}, index=[0])
    return normalize_frame(data, component_fields, performance_field, pool_fields)[0]


def pool_shares(data: pd.DataFrame, pool_fields: Sequence[str]) -> pd.DataFrame:
    """Each pool field's share of the pool total, for rows whose pool is valid.

    Rows with a non-numeric or negative pool member, or a non-positive total,
    are dropped.
    """
    values = numeric_columns(data, pool_fields)
    total = values.sum(axis=1)
    valid = values.notna().all(axis=1) & (values >= 0).all(axis=1) & (total > 0)
    return values[valid].div(total[valid], axis=0)
