"""Data analytics API for expense summaries.

This module converts expenses into pandas DataFrames and derives the
per-month summaries shown next to the expense table.
"""
import logging
from typing import Iterable, List

import pandas as pd

from ..core.expense import Expense

EXPENSE_DATA_COLUMNS: List[str] = ['date', 'category', 'amount', 'description', 'month']
MONTHLY_DATA_COLUMNS: List[str] = ['month', 'total', 'transactions']


def get_data(expenses: Iterable[Expense]) -> pd.DataFrame:
    """Convert expenses into a DataFrame, keeping their order.

    Args:
        expenses: Expenses, usually a store snapshot.

    Returns:
        pd.DataFrame: One row per expense with a datetime 'date' column and a
        'month' column holding the ``YYYY-MM`` key.
    """
    rows = [
        {
            'date': e.date,
            'category': e.category,
            'amount': e.amount,
            'description': e.description,
            'month': e.month_key,
        }
        for e in expenses
    ]
    if not rows:
        return pd.DataFrame(columns=EXPENSE_DATA_COLUMNS)

    df = pd.DataFrame(rows, columns=EXPENSE_DATA_COLUMNS)
    df['date'] = pd.to_datetime(df['date'])
    df['amount'] = pd.to_numeric(df['amount'], errors='coerce').fillna(0.0)
    return df


def get_monthly_totals(expenses: Iterable[Expense]) -> pd.DataFrame:
    """Total amount and number of expenses per month, newest month first.

    Returns:
        pd.DataFrame: Columns 'month', 'total' and 'transactions'.
    """
    df = get_data(expenses)
    if df.empty:
        return pd.DataFrame(columns=MONTHLY_DATA_COLUMNS)

    out = (
        df.groupby('month', sort=False)['amount']
        .agg(total='sum', transactions='count')
        .reset_index()
        .sort_values(by='month', ascending=False)
        .reset_index(drop=True)
    )
    logging.debug(f'Summarized {len(df)} expenses into {len(out)} months.')
    return out[MONTHLY_DATA_COLUMNS]


def get_category_month_totals(expenses: Iterable[Expense]) -> pd.DataFrame:
    """Pivot of amounts per category (rows) and month (columns).

    Categories keep their first-seen order, months are newest first and
    missing combinations are zero.
    """
    df = get_data(expenses)
    if df.empty:
        return pd.DataFrame()

    categories = list(dict.fromkeys(df['category']))
    months = sorted(df['month'].unique(), reverse=True)

    pivot = df.pivot_table(index='category', columns='month', values='amount', aggfunc='sum', fill_value=0.0)
    return pivot.reindex(index=categories, columns=months, fill_value=0.0)
