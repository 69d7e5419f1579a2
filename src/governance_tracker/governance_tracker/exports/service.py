"""Download formats for the submissions log.

JSON is the lossless backup format (and what import accepts). CSV, XLSX,
PDF and Word are read-only reports sharing the same columns.
"""

from __future__ import annotations

import csv
import io
import json
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

import pandas as pd
from markupsafe import escape
from PIL import Image, ImageDraw, ImageFont

from ..common.datetime_utils import format_date, format_timestamp, today_local
from ..core.constants import EXPORT_BASENAME, EXPORT_TITLE
from ..submissions.model import Submission

COLUMNS = ["PID", "Committee", "Meeting", "Date", "Submitted", "Attended", "Notes"]
WORD_COLUMNS = COLUMNS[:-1] + ["Notes/Document"]

# A4 landscape in points, rendered at 2x for legibility.
_PDF_SCALE = 2
_PDF_SIZE = (842 * _PDF_SCALE, 595 * _PDF_SCALE)
_PDF_MARGIN = 14 * _PDF_SCALE
_PDF_COL_WEIGHTS = (1.0, 2.0, 2.0, 1.3, 1.1, 0.8, 3.0)
_PDF_TRUNCATE = (None, 22, 22, None, 10, None, 35)


@dataclass(frozen=True)
class ExportFile:
    filename: str
    mimetype: str
    content: bytes


def export_filename(ext: str, *, on: Optional[date] = None) -> str:
    return f"{EXPORT_BASENAME}-{(on or today_local()).isoformat()}.{ext}"


def notes_cell(submission: Submission) -> str:
    return submission.attachment_name or submission.notes or ""


def export_rows(submissions: Sequence[Submission]) -> List[List[str]]:
    return [
        [
            s.pid,
            s.committee_name,
            s.meeting_name,
            format_date(s.meeting_date),
            format_timestamp(s.timestamp),
            "Yes" if s.attendance_confirmed else "No",
            notes_cell(s),
        ]
        for s in submissions
    ]


def to_json(submissions: Sequence[Submission], *, on: Optional[date] = None) -> ExportFile:
    text = json.dumps([s.to_dict() for s in submissions], indent=2, ensure_ascii=False)
    return ExportFile(export_filename("json", on=on), "application/json", text.encode("utf-8"))


def to_csv(submissions: Sequence[Submission], *, on: Optional[date] = None) -> ExportFile:
    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow(COLUMNS)
    writer.writerows(export_rows(submissions))
    return ExportFile(export_filename("csv", on=on), "text/csv", out.getvalue().encode("utf-8-sig"))


def to_xlsx(submissions: Sequence[Submission], *, on: Optional[date] = None) -> ExportFile:
    df = pd.DataFrame(export_rows(submissions), columns=COLUMNS)
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Submissions")
    return ExportFile(
        export_filename("xlsx", on=on),
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        out.getvalue(),
    )


def to_word(submissions: Sequence[Submission], *, on: Optional[date] = None) -> ExportFile:
    """HTML table with Office namespaces; Word opens it as a document."""

    body_rows = "".join(
        "<tr>" + "".join(f"<td>{escape(cell)}</td>" for cell in row) + "</tr>\n"
        for row in export_rows(submissions)
    )
    header = "".join(f"<th>{escape(c)}</th>" for c in WORD_COLUMNS)
    html = (
        "<!DOCTYPE html>\n"
        '<html xmlns:o="urn:schemas-microsoft-com:office:office" '
        'xmlns:w="urn:schemas-microsoft-com:office:word">\n'
        '<head><meta charset="utf-8"><title>Governance Submissions</title></head>\n'
        "<body>\n"
        f"<h1>{escape(EXPORT_TITLE)}</h1>\n"
        '<table border="1" cellpadding="4" cellspacing="0" style="border-collapse:collapse;width:100%">\n'
        f"<thead><tr>{header}</tr></thead>\n"
        f"<tbody>{body_rows}</tbody>\n"
        "</table>\n"
        "</body>\n"
        "</html>"
    )
    return ExportFile(export_filename("doc", on=on), "application/msword", ("\ufeff" + html).encode("utf-8"))


def _truncate(text: str, limit: Optional[int]) -> str:
    return text if limit is None else text[:limit]


def _load_font(size: int):
    try:
        return ImageFont.load_default(size=size)
    except TypeError:
        # Pillow builds without the sized default font.
        return ImageFont.load_default()


def _pdf_pages(rows: List[List[str]]) -> List[Image.Image]:
    width, height = _PDF_SIZE
    title_font = _load_font(14 * _PDF_SCALE)
    cell_font = _load_font(7 * _PDF_SCALE)
    row_height = 12 * _PDF_SCALE
    table_top = 30 * _PDF_SCALE

    usable = width - 2 * _PDF_MARGIN
    total = sum(_PDF_COL_WEIGHTS)
    xs = [_PDF_MARGIN]
    for weight in _PDF_COL_WEIGHTS[:-1]:
        xs.append(xs[-1] + int(usable * weight / total))

    per_page = max(1, (height - table_top - _PDF_MARGIN) // row_height - 1)
    chunks = [rows[i : i + per_page] for i in range(0, len(rows), per_page)] or [[]]

    pages: List[Image.Image] = []
    for number, chunk in enumerate(chunks, start=1):
        page = Image.new("RGB", _PDF_SIZE, "white")
        draw = ImageDraw.Draw(page)
        draw.text((_PDF_MARGIN, 10 * _PDF_SCALE), EXPORT_TITLE, fill="black", font=title_font)

        y = table_top
        draw.rectangle([_PDF_MARGIN, y, width - _PDF_MARGIN, y + row_height], fill=(134, 31, 65))
        for x, title in zip(xs, COLUMNS):
            draw.text((x + 3 * _PDF_SCALE, y + 2 * _PDF_SCALE), title, fill="white", font=cell_font)

        for row in chunk:
            y += row_height
            draw.line([_PDF_MARGIN, y + row_height, width - _PDF_MARGIN, y + row_height], fill=(200, 200, 200))
            for x, cell, limit in zip(xs, row, _PDF_TRUNCATE):
                draw.text((x + 3 * _PDF_SCALE, y + 2 * _PDF_SCALE), _truncate(cell, limit), fill="black", font=cell_font)

        footer = f"Page {number} of {len(chunks)}"
        draw.text((width - _PDF_MARGIN - 60 * _PDF_SCALE, height - _PDF_MARGIN), footer, fill="gray", font=cell_font)
        pages.append(page)
    return pages


def to_pdf(submissions: Sequence[Submission], *, on: Optional[date] = None) -> ExportFile:
    rows = export_rows(submissions)
    pages = _pdf_pages(rows)
    out = io.BytesIO()
    pages[0].save(out, format="PDF", save_all=True, append_images=pages[1:], resolution=72.0 * _PDF_SCALE)
    return ExportFile(export_filename("pdf", on=on), "application/pdf", out.getvalue())


EXPORTERS = {
    "json": to_json,
    "csv": to_csv,
    "xlsx": to_xlsx,
    "doc": to_word,
    "pdf": to_pdf,
}
