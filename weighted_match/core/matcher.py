"""Linking rows of two DataFrames by weighted distance."""

from typing import Any, Dict, Optional
import logging
import time

import numpy as np
import pandas as pd

from weighted_match.config.models import DEFAULT_THRESHOLD
from weighted_match.core.distance import DistanceCalculator

logger = logging.getLogger(__name__)

MATCH_COLUMNS = ('is_matched', 'match_distance', 'matched_record_id')

def match_dataframes(
    calculator: DistanceCalculator,
    source_df: pd.DataFrame,
    target_df: pd.DataFrame,
    threshold: float = DEFAULT_THRESHOLD
) -> pd.DataFrame:
    """
    Annotate every source row with its closest target row.

    Rows are compared with a linear scan; ties go to the first target row.

    Args:
        calculator: Distance calculator whose fields name DataFrame columns
        source_df: Rows to find matches for
        target_df: Rows to search
        threshold: Largest distance still counted as a match

    Returns:
        pd.DataFrame: Copy of source_df with match columns added
    """
    start_time = time.time()

    missing = [
        rule.field_name for rule in calculator.rule_set
        if rule.extractor is None and (
            rule.field_name not in source_df.columns
            or rule.field_name not in target_df.columns
        )
    ]
    if missing:
        raise KeyError(f"Columns missing from source or target: {missing}")

    target_rows = [row for _, row in target_df.iterrows()]
    records = [
        _match_row(calculator, row, target_rows, threshold)
        for _, row in source_df.iterrows()
    ]

    result_df = source_df.copy()
    match_df = pd.DataFrame(records, index=source_df.index, columns=list(MATCH_COLUMNS))
    for column in MATCH_COLUMNS:
        result_df[column] = match_df[column]

    matched = int(result_df['is_matched'].sum()) if len(result_df) else 0
    logger.info(
        f"Matched {matched} of {len(result_df)} rows in "
        f"{time.time() - start_time:.2f} seconds"
    )
    return result_df

def _match_row(
    calculator: DistanceCalculator,
    row: pd.Series,
    target_rows: list,
    threshold: float
) -> Dict[str, Any]:
    """Match data for one source row."""
    if not target_rows:
        return _no_match()

    distances = np.fromiter(
        (calculator.calculate_distance(row, target) for target in target_rows),
        dtype=float,
        count=len(target_rows)
    )
    # argmin returns the first occurrence of the minimum.
    best = int(np.argmin(distances))

    if distances[best] > threshold:
        return _no_match(float(distances[best]))

    return {
        'is_matched': True,
        'match_distance': float(distances[best]),
        'matched_record_id': target_rows[best].name
    }

def _no_match(distance: Optional[float] = None) -> Dict[str, Any]:
    return {
        'is_matched': False,
        'match_distance': distance,
        'matched_record_id': None
    }
