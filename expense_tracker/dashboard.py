"""Streamlit app for the expense tracker.

The page shows this month's spend, the transaction count, the average daily
spend over the last 30 days and a naive forecast for next month, followed by
the (filtered) list of expenses and a monthly bar chart.  Expenses are added
through a form and can be exported to or imported from CSV.

To run the dashboard from the command line::

    streamlit run expense_tracker/dashboard.py

or use ``python run_dashboard.py``.
"""

from __future__ import annotations

import os
import sys
from datetime import date
from typing import Dict, List, Optional, Sequence

import pandas as pd
import streamlit as st

# Support both ``streamlit run expense_tracker/dashboard.py`` (no package
# context) and ``python -m expense_tracker.dashboard``.
if __package__:
    from . import visualization as viz
    from .config import ALL_CATEGORIES, DEFAULT_CATEGORIES, DEFAULT_CATEGORY, EXPORT_FILENAME, STORAGE_KEY, get_data_dir
    from .exceptions import InvalidAmount, InvalidDate, NothingToExport
    from .filters import categories_in
    from .formatting import format_currency
    from .logging_setup import configure_logging, get_logger
    from .models import ExpenseRecord, ExpenseStats, FilterCriteria
    from .service import ExpenseTracker
    from .storage import JsonFileBlobStore
else:
    CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
    PARENT_DIR = os.path.dirname(CURRENT_DIR)
    if PARENT_DIR not in sys.path:
        sys.path.insert(0, PARENT_DIR)
    from expense_tracker import visualization as viz  # type: ignore
    from expense_tracker.config import ALL_CATEGORIES, DEFAULT_CATEGORIES, DEFAULT_CATEGORY, EXPORT_FILENAME, STORAGE_KEY, get_data_dir  # type: ignore
    from expense_tracker.exceptions import InvalidAmount, InvalidDate, NothingToExport  # type: ignore
    from expense_tracker.filters import categories_in  # type: ignore
    from expense_tracker.formatting import format_currency  # type: ignore
    from expense_tracker.logging_setup import configure_logging, get_logger  # type: ignore
    from expense_tracker.models import ExpenseRecord, ExpenseStats, FilterCriteria  # type: ignore
    from expense_tracker.service import ExpenseTracker  # type: ignore
    from expense_tracker.storage import JsonFileBlobStore  # type: ignore

logger = get_logger(__name__)

FILTER_STATE_KEY = 'expense_filters'
IMPORTED_FILES_KEY = 'imported_file_ids'


@st.cache_resource
def _open_shared_tracker(data_dir: str, key: str) -> ExpenseTracker:
    logger.info("Opening expense store %r in %s", key, data_dir)
    return ExpenseTracker.open(JsonFileBlobStore(data_dir), key=key)


def _get_tracker() -> ExpenseTracker:
    """Return the tracker shared by every session of this server process."""
    return _open_shared_tracker(str(get_data_dir()), STORAGE_KEY)


def category_options(records: Sequence[ExpenseRecord]) -> List[str]:
    """Filter choices: the ``all`` sentinel, known categories, then any others."""
    options = [ALL_CATEGORIES] + list(DEFAULT_CATEGORIES)
    for category in categories_in(records):
        if category not in options:
            options.append(category)
    return options


def criteria_from_inputs(category: Optional[str], date_from: Optional[date], date_to: Optional[date]) -> FilterCriteria:
    return FilterCriteria(
        category=None if not category or category == ALL_CATEGORIES else category,
        date_from=date_from.isoformat() if date_from else None,
        date_to=date_to.isoformat() if date_to else None,
    )


def transactions_frame(records: Sequence[ExpenseRecord]) -> pd.DataFrame:
    """Table shown under the statistics, newest first as given."""
    return pd.DataFrame(
        [
            {
                'Date': r.date,
                'Description': r.description,
                'Category': r.category,
                'Amount': format_currency(r.amount),
            }
            for r in records
        ],
        columns=['Date', 'Description', 'Category', 'Amount'],
    )


def stats_tiles(stats: ExpenseStats) -> Dict[str, str]:
    return {
        'This month': format_currency(stats.current_month_total),
        'Transactions': str(stats.transaction_count),
        'Avg / day (30d)': format_currency(stats.rolling_average),
        'Forecast next month': format_currency(stats.forecast),
    }


def _render_add_form(tracker: ExpenseTracker) -> None:
    st.subheader("➕ Add expense")
    with st.form("add_expense", clear_on_submit=True):
        description = st.text_input("Description", placeholder="Untitled")
        amount = st.number_input("Amount", min_value=0.0, value=0.0, step=1.0)
        category = st.selectbox("Category", options=DEFAULT_CATEGORIES, index=DEFAULT_CATEGORIES.index(DEFAULT_CATEGORY))
        spent_on = st.date_input("Date", value=date.today())
        submitted = st.form_submit_button("Save")

    if not submitted:
        return
    try:
        record = tracker.add_expense(
            description=description,
            amount=amount,
            category=category,
            date=spent_on,
        )
    except (InvalidAmount, InvalidDate) as exc:
        st.error(str(exc))
        return
    st.success(f"Saved {record.description} ({format_currency(record.amount)})")


def _render_filters(records: Sequence[ExpenseRecord]) -> FilterCriteria:
    st.sidebar.header("Filters")
    with st.sidebar.form("filters"):
        category = st.selectbox("Category", options=category_options(records), index=0)
        date_from = st.date_input("From", value=None)
        date_to = st.date_input("To", value=None)
        applied = st.form_submit_button("Apply filter")

    if applied or FILTER_STATE_KEY not in st.session_state:
        st.session_state[FILTER_STATE_KEY] = criteria_from_inputs(category, date_from, date_to)
    return st.session_state[FILTER_STATE_KEY]


def _render_stats(stats: ExpenseStats) -> None:
    tiles = stats_tiles(stats)
    columns = st.columns(len(tiles))
    for column, (label, value) in zip(columns, tiles.items()):
        with column:
            st.metric(label, value)


def _render_transactions(records: Sequence[ExpenseRecord]) -> None:
    st.subheader("Transactions")
    if not records:
        st.info("No transactions match the current filter.")
        return
    st.dataframe(transactions_frame(records), hide_index=True, use_container_width=True)


def _render_import_export(tracker: ExpenseTracker) -> None:
    st.sidebar.header("Import / export")
    _render_import(tracker)
    _render_export(tracker)


def _render_import(tracker: ExpenseTracker) -> None:
    uploaded = st.sidebar.file_uploader("Import CSV", type=["csv"], accept_multiple_files=False)
    if uploaded is None:
        return
    imported = st.session_state.setdefault(IMPORTED_FILES_KEY, set())
    file_key = getattr(uploaded, 'file_id', None) or f"{uploaded.name}:{uploaded.size}"
    if file_key in imported:
        return
    imported.add(file_key)
    logger.info("Importing %s", uploaded.name)

    text = uploaded.getvalue().decode('utf-8-sig', errors='replace')
    summary = tracker.import_csv_text(text)
    st.sidebar.success(f"Imported {len(summary.added)} expense(s)")
    if summary.problems:
        st.sidebar.warning(
            f"Skipped {len(summary.problems)} row(s):\n\n" + "\n".join(f"- {p}" for p in summary.problems)
        )


def _render_export(tracker: ExpenseTracker) -> None:
    try:
        csv_text = tracker.export_csv_text()
    except NothingToExport:
        st.sidebar.caption("No data to export")
    else:
        st.sidebar.download_button(
            label="Export CSV",
            data=csv_text,
            file_name=EXPORT_FILENAME,
            mime="text/csv",
        )


def _render_clear_all(tracker: ExpenseTracker) -> None:
    if st.sidebar.button("Clear all data"):
        st.session_state.confirm_clear = True
    if st.session_state.get('confirm_clear', False):
        st.sidebar.warning("This deletes every saved expense.")
        col1, col2 = st.sidebar.columns(2)
        with col1:
            if st.button("Yes, clear"):
                tracker.clear()
                st.session_state.confirm_clear = False
                st.rerun()
        with col2:
            if st.button("Cancel"):
                st.session_state.confirm_clear = False
                st.rerun()


def main() -> None:
    """Entry point for the Streamlit app."""
    configure_logging()
    st.set_page_config(
        page_title="Expense Tracker",
        page_icon="💸",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    st.title("Expense Tracker")

    tracker = _get_tracker()
    _render_add_form(tracker)
    _render_clear_all(tracker)
    _render_import_export(tracker)

    criteria = _render_filters(tracker.records)
    view = tracker.view(criteria)

    _render_stats(view.stats)
    st.plotly_chart(viz.create_monthly_bar_chart(view.series), use_container_width=True)
    _render_transactions(view.display_list)
    if view.display_list:
        st.plotly_chart(viz.create_category_pie_chart(view.display_list), use_container_width=True)


if __name__ == "__main__":  # pragma: no cover
    main()
