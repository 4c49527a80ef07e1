"""Data loading and parsing utilities."""

import io
from typing import List, Optional, Tuple

import pandas as pd

from .logger import get_logger

logger = get_logger(__name__)


def parse_uploaded_file(uploaded_file, delimiter: str = 'auto') -> Tuple[Optional[pd.DataFrame], Optional[List[str]], Optional[str]]:
    """Parse uploaded CSV/TXT file with a header row.

    Args:
        uploaded_file: Streamlit uploaded file object (or any binary file-like)
        delimiter: Delimiter to use ('auto', ',', '\\t', or regex pattern)

    Returns:
        Tuple of (DataFrame, field names, error message or None)
    """
    try:
        content = uploaded_file.read()

        try:
            text = content.decode('utf-8-sig')
        except UnicodeDecodeError:
            text = content.decode('shift-jis')

        uploaded_file.seek(0)

        if not text.strip():
            return None, None, "File is empty"

        if delimiter == 'auto':
            first_line = text.lstrip().split('\n')[0]
            if '\t' in first_line:
                delimiter = '\t'
            elif ',' in first_line:
                delimiter = ','
            else:
                delimiter = r'\s+'

        if delimiter == r'\s+':
            df = pd.read_csv(io.StringIO(text), sep=delimiter, engine='python', skip_blank_lines=True)
        else:
            df = pd.read_csv(io.StringIO(text), sep=delimiter, skip_blank_lines=True)

        df.columns = [str(col).strip() for col in df.columns]
        # Lines of bare delimiters survive skip_blank_lines
        df = df.dropna(how='all').reset_index(drop=True)
        fields = list(df.columns)

        logger.info("Parsed %d rows with fields %s", len(df), fields)
        return df, fields, None

    except Exception as e:
        logger.warning("Could not parse uploaded file: %s", e)
        return None, None, str(e)


def get_sample_data() -> pd.DataFrame:
    """Generate sample mixture data for demonstration.

    Returns:
        DataFrame with a Li2S-P2S5-LiI-LiBr-LiCl composition series (mol ratios)
        and an ionic conductivity column
    """
    data = [
        {'Li2S': 75, 'P2S5': 25, 'LiI': 0, 'LiBr': 0, 'LiCl': 0, 'sigma': 0.5},
        {'Li2S': 70, 'P2S5': 20, 'LiI': 10, 'LiBr': 0, 'LiCl': 0, 'sigma': 1.2},
        {'Li2S': 60, 'P2S5': 30, 'LiI': 10, 'LiBr': 0, 'LiCl': 0, 'sigma': 2.5},
        {'Li2S': 50, 'P2S5': 40, 'LiI': 10, 'LiBr': 0, 'LiCl': 0, 'sigma': 3.8},
        {'Li2S': 65, 'P2S5': 25, 'LiI': 5, 'LiBr': 5, 'LiCl': 0, 'sigma': 2.1},
        {'Li2S': 55, 'P2S5': 35, 'LiI': 5, 'LiBr': 5, 'LiCl': 0, 'sigma': 3.2},
        {'Li2S': 60, 'P2S5': 25, 'LiI': 5, 'LiBr': 5, 'LiCl': 5, 'sigma': 2.8},
        {'Li2S': 50, 'P2S5': 30, 'LiI': 10, 'LiBr': 5, 'LiCl': 5, 'sigma': 4.5},
        {'Li2S': 45, 'P2S5': 35, 'LiI': 10, 'LiBr': 5, 'LiCl': 5, 'sigma': 5.2},
        {'Li2S': 40, 'P2S5': 40, 'LiI': 10, 'LiBr': 10, 'LiCl': 0, 'sigma': 4.8},
        {'Li2S': 55, 'P2S5': 30, 'LiI': 0, 'LiBr': 10, 'LiCl': 5, 'sigma': 3.5},
        {'Li2S': 50, 'P2S5': 35, 'LiI': 0, 'LiBr': 5, 'LiCl': 10, 'sigma': 4.0},
        {'Li2S': 45, 'P2S5': 30, 'LiI': 15, 'LiBr': 5, 'LiCl': 5, 'sigma': 5.9},
        {'Li2S': 40, 'P2S5': 35, 'LiI': 10, 'LiBr': 10, 'LiCl': 5, 'sigma': 5.4},
    ]
    return pd.DataFrame(data)
