"""Text formatting for axis titles and hover labels."""

import re
from typing import Sequence


def subscript_num_html(composition: str) -> str:
    """Convert numbers in composition formula to HTML subscript format.

    Args:
        composition: Chemical formula string (e.g., "Li2S", "P2S5")

    Returns:
        HTML string with subscript numbers (e.g., "Li<sub>2</sub>S")
    """
    if not composition:
        return composition
    result = re.sub(r'(\d+\.?\d*)', r'<sub>\1</sub>', composition)
    result = result.replace('<sub>1</sub>', '')
    return result


def axis_title(field: str, auto_subscript: bool = True) -> str:
    return subscript_num_html(field) if auto_subscript else field


def hover_label(
    component_fields: Sequence[str],
    coordinates: Sequence[float],
    performance_field: str,
    performance: float,
) -> str:
    """Hover text listing each component as a percentage, then the performance value.

    Example: "A: 50.00%<br>B: 0.00%<br>C: 50.00%<br>P: 20.000"
    """
    components_text = '<br>'.join(
        f"{field}: {value * 100:.2f}%"
        for field, value in zip(component_fields, coordinates)
    )
    return f"{components_text}<br>{performance_field}: {performance:.3f}"
