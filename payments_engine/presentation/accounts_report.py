"""Report generators for account snapshots and rejected events."""
from __future__ import annotations

import csv
import io
from decimal import ROUND_HALF_EVEN, Context, Decimal
from typing import Sequence

from payments_engine.config import SETTINGS
from payments_engine.domain.models import AccountSnapshot
from payments_engine.domain.results import Rejection, ReplayReport

REJECTION_COLUMNS = ("type", "client", "tx", "amount", "error", "message")

# Rounds on output only; never traps.
_REPORT_CONTEXT = Context(prec=64)


def format_amount(value: Decimal, scale: int | None = None) -> str:
    scale = SETTINGS.output_scale if scale is None else scale
    quantum = Decimal(1).scaleb(-scale)
    if value.is_zero():
        value = value.copy_abs()
    return str(value.quantize(quantum, rounding=ROUND_HALF_EVEN, context=_REPORT_CONTEXT))


def snapshots_to_rows(snapshots: Sequence[AccountSnapshot]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for item in snapshots:
        rows.append(
            {
                "client": str(item.client_id),
                "available": format_amount(item.available),
                "held": format_amount(item.held),
                "total": format_amount(item.total),
                "locked": "true" if item.locked else "false",
            }
        )
    return rows


def rejections_to_rows(rejections: Sequence[Rejection]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for item in rejections:
        event = item.event
        rows.append(
            {
                "type": event.event_type.value,
                "client": str(event.client_id),
                "tx": str(event.transaction_id),
                "amount": "" if event.amount is None else str(event.amount),
                "error": item.code,
                "message": item.message,
            }
        )
    return rows


def render_csv(rows: Sequence[dict[str, str]], fieldnames: Sequence[str] = SETTINGS.output_columns) -> bytes:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(fieldnames), lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def render_html(report: ReplayReport) -> str:
    rows = snapshots_to_rows(report.snapshots)
    if not rows:
        return "<p>No accounts.</p>"
    header = "".join(f"<th>{col}</th>" for col in rows[0].keys())
    body_parts = []
    for row in rows:
        body_parts.append("<tr>" + "".join(f"<td>{value}</td>" for value in row.values()) + "</tr>")
    body_html = "".join(body_parts)
    return f"<table><thead><tr>{header}</tr></thead><tbody>{body_html}</tbody></table>"
