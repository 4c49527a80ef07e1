"""Draw order of points in the 3D scatter."""

from typing import List, Sequence

# 'high': high performers drawn last (on top); 'low': low performers on top
DRAW_ORDERS = ('high', 'low')
DEFAULT_DRAW_ORDER = 'high'


def sort_points(points: Sequence, draw_order: str) -> List:
    """Stable sort of points by their ``performance`` attribute.

    Ties keep their input order. An unknown draw order keeps the input order.
    """
    if draw_order == 'high':
        return sorted(points, key=lambda point: point.performance)
    if draw_order == 'low':
        return sorted(points, key=lambda point: point.performance, reverse=True)
    return list(points)
