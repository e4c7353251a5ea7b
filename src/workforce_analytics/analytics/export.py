from __future__ import annotations

import io

import pandas as pd

from .model import MetricsReport

REPORT_COLUMNS = {
    "name": "Employee",
    "branch": "Branch",
    "position": "Position",
    "days_present": "Days Present",
    "total_hours": "Total Hours",
    "leave_count": "Leaves",
    "pending_task_count": "Pending Tasks",
}


def report_to_dataframe(report: MetricsReport) -> pd.DataFrame:
    data = [{label: getattr(row, field) for field, label in REPORT_COLUMNS.items()} for row in report.rows]
    return pd.DataFrame(data, columns=list(REPORT_COLUMNS.values()))


def report_to_excel_bytes(report: MetricsReport, *, sheet_name: str = "Analytics") -> bytes:
    """Render the report as an .xlsx workbook held in memory.

    The per-employee table is followed by a totals row built from the roll-up.
    """
    df = report_to_dataframe(report)
    totals = {
        "Employee": "Total",
        "Days Present": report.rollup.days_present,
        "Total Hours": report.rollup.total_hours,
        "Leaves": report.rollup.leave_count,
        "Pending Tasks": report.rollup.pending_task_count,
    }
    df = pd.concat([df, pd.DataFrame([totals], columns=df.columns)], ignore_index=True)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)

    return output.getvalue()
