"""Streamlit front-end for the ledger replay pipeline."""
from __future__ import annotations

from typing import Sequence

import pandas as pd
import streamlit as st

from payments_engine import CsvEventSource, LedgerReplayContext, ReplayLedgerUseCase
from payments_engine.config import SETTINGS
from payments_engine.domain.results import ReplayReport
from payments_engine.infrastructure.parsing.utils import MalformedRecordError
from payments_engine.logging_config import setup_logging
from payments_engine.presentation.accounts_report import (
    REJECTION_COLUMNS,
    rejections_to_rows,
    render_csv,
    render_html,
    snapshots_to_rows,
)


setup_logging("INFO")
st.set_page_config(page_title="Payments Engine", layout="wide")
st.title("Transaction Ledger Replay")


def rows_to_dataframe(rows: Sequence[dict[str, str]], columns: Sequence[str]) -> pd.DataFrame:
    return pd.DataFrame(list(rows), columns=list(columns))


def run_replay(transactions_bytes: bytes) -> ReplayReport:
    context = LedgerReplayContext(event_source=CsvEventSource(transactions_bytes))
    return ReplayLedgerUseCase(context).execute()


if "view" not in st.session_state:
    st.session_state["view"] = "upload"
if "result" not in st.session_state:
    st.session_state["result"] = None


if st.session_state["view"] == "upload":
    transactions_file = st.file_uploader("Upload transactions file", type=["csv"])
    run_btn = st.button("Replay", disabled=not transactions_file)
    if run_btn and transactions_file:
        with st.spinner("Replaying..."):
            try:
                report = run_replay(transactions_file.read())
            except MalformedRecordError as exc:
                st.error(f"Malformed input at {exc}")
                report = None
        if report is not None:
            account_rows = snapshots_to_rows(report.snapshots)
            st.session_state["result"] = {
                "report": report,
                "accounts_csv": render_csv(account_rows),
                "accounts_html": render_html(report),
            }
            st.session_state["view"] = "results"
            st.rerun()
else:
    back_clicked = st.button("← Back", key="back_to_upload")
    if back_clicked:
        st.session_state["view"] = "upload"
        st.session_state["result"] = None
        st.rerun()

    result = st.session_state.get("result")
    if not result:
        st.info("No results available. Upload a file and run the replay first.")
    else:
        report: ReplayReport = result["report"]

        st.subheader("Summary")
        summary = report.summary
        cols = st.columns(5)
        cols[0].metric("Events", summary.total_events)
        cols[1].metric("Applied", summary.applied)
        cols[2].metric("Rejected", summary.rejected)
        cols[3].metric("Accounts", summary.accounts)
        cols[4].metric("Locked accounts", summary.locked_accounts)

        tabs = st.tabs(["Accounts", "Rejected events"])
        with tabs[0]:
            st.dataframe(rows_to_dataframe(snapshots_to_rows(report.snapshots), SETTINGS.output_columns))
            st.download_button(
                "Download accounts CSV",
                data=result["accounts_csv"],
                file_name="accounts.csv",
                mime="text/csv",
            )
            st.download_button(
                "Download accounts HTML",
                data=result["accounts_html"].encode("utf-8"),
                file_name="accounts.html",
                mime="text/html",
            )
        with tabs[1]:
            st.dataframe(rows_to_dataframe(rejections_to_rows(report.rejections), REJECTION_COLUMNS))
