"""Example usage of the distance matching system with bank transactions."""

import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from weighted_match import DistanceCalculator, FieldConfig, match_dataframes


def create_transaction_matcher(date_window_days: int = 30) -> DistanceCalculator:
    """
    Create a calculator for matching bank transactions.

    Args:
        date_window_days: Posting dates this far apart are maximally distant

    Returns:
        DistanceCalculator: Configured calculator instance
    """
    return DistanceCalculator({
        'description': {
            'weight': 0.80,
            'calculator': 'levenshtein',
            'ignore_case': True
        },
        'date': FieldConfig(
            calculator='day_of_year',
            weight=0.90,
            options={'threshold': date_window_days}
        )
    })

def match_csv_files(
    base_file: Path,
    match_file: Path,
    output_file: Optional[Path] = None,
    threshold: float = 0.2
) -> pd.DataFrame:
    """
    Match transactions between two CSV files.

    Args:
        base_file: Path to the transactions to reconcile
        match_file: Path to the transactions to search
        output_file: Optional path for the annotated CSV
        threshold: Largest distance still counted as a match

    Returns:
        pd.DataFrame: Base transactions with match columns
    """
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    calculator = create_transaction_matcher()

    logging.info(f"Reading base file: {base_file}")
    df1 = pd.read_csv(base_file, dtype=str)

    logging.info(f"Reading match file: {match_file}")
    df2 = pd.read_csv(match_file, dtype=str)

    results = match_dataframes(calculator, df1, df2, threshold=threshold)

    total_records = len(results)
    matched_records = int(results['is_matched'].sum())
    if total_records:
        logging.info(
            f"Matched records: {matched_records} of {total_records} "
            f"({matched_records/total_records*100:.1f}%)"
        )

    if output_file:
        logging.info(f"Saving results to: {output_file}")
        results.to_csv(output_file, index=False)

    return results

if __name__ == "__main__":
    calculator = create_transaction_matcher()

    ledger = [
        {'description': 'Audible.com', 'date': '2015-02-05'},
        {'description': 'Questar Gas', 'date': '2015-04-01'},
        {'description': 'Wells Fargo Dealer Services', 'date': '2015-06-17'},
        {'description': 'Taco Bell', 'date': '2015-06-01'},
    ]
    statement_line = {'description': 'WELLS FARGO DEALER SVC', 'date': '2015-06-18'}

    match = calculator.closest_match(statement_line, ledger, threshold=0.2)
    if match is None:
        print("No match found")
    else:
        print(f"Matched {match.item['description']} at distance {match.distance:.3f}")
