"""CSV and spreadsheet exports of registration records.

Every CSV field, the header included, is wrapped in double quotes and any
embedded quote is doubled, so names such as ``Ravi "RK" Kumar`` survive a
round trip through a spreadsheet.
"""

import csv
import io
import re
from datetime import date
from typing import Iterable, Sequence

from openpyxl import Workbook

from .schemas import Registration

ALL_HEADERS = [
    "Name", "Email", "Phone", "College", "Roll Number", "Section",
    "Events", "Total Amount", "Registration Date",
]

EVENT_HEADERS = [
    "Name", "Email", "Phone", "College", "Roll Number", "Section", "Registration Date",
]

EVENT_SEPARATOR = "; "


def format_date(r: Registration) -> str:
    return r.registration_date.date().isoformat()


def render_csv(headers: Sequence[str], rows: Iterable[Sequence[object]]) -> str:
    buf = io.StringIO()
    w = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    w.writerow(headers)
    for row in rows:
        w.writerow(row)
    # no trailing newline: an empty export is exactly the header line
    return buf.getvalue().removesuffix("\n")


def _all_row(r: Registration) -> list[object]:
    return [
        r.name,
        r.email,
        r.phone,
        r.college,
        r.roll_number,
        r.section,
        EVENT_SEPARATOR.join(r.event_names),
        r.total_amount,
        format_date(r),
    ]


def export_all(registrations: Iterable[Registration]) -> str:
    """One row per registration, in the order given (newest first from the store)."""
    return render_csv(ALL_HEADERS, (_all_row(r) for r in registrations))


def participants_of(registrations: Iterable[Registration], event_name: str) -> list[Registration]:
    return [r for r in registrations if any(e.name == event_name for e in r.selected_events)]


def participants_of_event(registrations: Iterable[Registration], event_id: str) -> list[Registration]:
    return [r for r in registrations if any(e.id == event_id for e in r.selected_events)]


def _event_rows(registrations: Iterable[Registration]) -> str:
    rows = (
        [r.name, r.email, r.phone, r.college, r.roll_number, r.section, format_date(r)]
        for r in registrations
    )
    return render_csv(EVENT_HEADERS, rows)


def export_for_event(registrations: Iterable[Registration], event_name: str) -> str:
    return _event_rows(participants_of(registrations, event_name))


def export_for_event_id(registrations: Iterable[Registration], event_id: str) -> str:
    """Same columns as export_for_event, matched on the stable event id.

    Keeps the rows in step with the id-keyed dashboard stats, whatever name a
    snapshot was recorded under.
    """
    return _event_rows(participants_of_event(registrations, event_id))


def all_export_filename(today: date) -> str:
    return f"registrations_{today.isoformat()}.csv"


def event_export_filename(event_name: str) -> str:
    slug = re.sub(r"\s+", "_", event_name)
    return f"{slug}_participants.csv"


def build_excel(registrations: Iterable[Registration]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Registrations"

    ws.append(ALL_HEADERS)

    for r in registrations:
        row = _all_row(r)
        row[-1] = r.registration_date.replace(tzinfo=None)
        ws.append(row)

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()
