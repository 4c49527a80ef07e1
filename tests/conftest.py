"""
Shared fixtures for the mixture plot analyzer tests.
"""

import sys
from pathlib import Path

import pandas as pd
import pytest

# Ensure the project root is in the path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture
def abc_data():
    """Three components plus a performance column."""
    return pd.DataFrame([
        {'A': 1, 'B': 1, 'C': 1, 'P': 10},
        {'A': 2, 'B': 0, 'C': 2, 'P': 20},
    ])


@pytest.fixture
def mixed_rows():
    """Rows mixing numbers, numeric text, junk text and missing values."""
    return [
        {'A': 1, 'B': '2', 'C': 1.0, 'D': 0, 'P': 3.5},
        {'A': 'x', 'B': 1, 'C': 1, 'D': 1, 'P': 1.0},
        {'A': 0, 'B': 0, 'C': 0, 'D': 0, 'P': 5},
        {'A': 1, 'B': None, 'C': 1, 'D': 1, 'P': 2},
        {'A': 1, 'B': 1, 'C': 1, 'D': 1, 'P': 'n/a'},
        {'A': 3, 'B': 1, 'C': ' 4 ', 'D': 2, 'P': '7.25'},
    ]


@pytest.fixture
def pool_data():
    """Five-member pool where D and E are held by constraints."""
    return pd.DataFrame([
        {'A': 100, 'B': 100, 'C': 100, 'D': 503, 'E': 197, 'P': 1.0},
        {'A': 100, 'B': 100, 'C': 100, 'D': 510, 'E': 190, 'P': 2.0},
        {'A': 200, 'B': 100, 'C': 100, 'D': 500, 'E': 100, 'P': 3.0},
        {'A': 250, 'B': 250, 'C': 250, 'D': 0, 'E': 250, 'P': 4.0},
    ])
