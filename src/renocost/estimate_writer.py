"""Persist an estimate as JSON, a CSV audit, and optional workbook and PDF summaries."""

from __future__ import annotations

import json
import logging
import textwrap
from dataclasses import asdict
from pathlib import Path
from typing import Dict, Union

import pandas as pd
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from .formatting import format_currency, format_quantity
from .models import ItemizedEstimateResult
from .quick_estimate import QuickEstimateResult
from .reporting import line_items_frame, rooms_frame, summary_frame

logger = logging.getLogger(__name__)

ESTIMATE_JSON = "estimate.json"
LINE_ITEMS_CSV = "Estimate_LineItems.csv"
BREAKDOWN_XLSX = "Estimate_Breakdown.xlsx"
SUMMARY_PDF = "Estimate_Summary.pdf"


def write_json(result: Union[ItemizedEstimateResult, QuickEstimateResult], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(result.to_dict(), fh, indent=2, ensure_ascii=False)
    return path


def write_xlsx(result: ItemizedEstimateResult, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        summary_frame(result).to_excel(writer, sheet_name="Summary", index=False)
        rooms_frame(result).to_excel(writer, sheet_name="Rooms", index=False)
        line_items_frame(result).to_excel(writer, sheet_name="Line Items", index=False)
        if result.diagnostics:
            pd.DataFrame([asdict(d) for d in result.diagnostics]).to_excel(
                writer, sheet_name="Diagnostics", index=False
            )
    return path


def write_pdf(result: ItemizedEstimateResult, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    cur = result.currency
    c = canvas.Canvas(str(path), pagesize=A4)
    _, page_height = A4
    margin = 40
    y = page_height - margin

    def line(text: str, font: str = "Helvetica", size: int = 10, gap: int = 14) -> None:
        nonlocal y
        if y < margin + gap:
            c.showPage()
            y = page_height - margin
        c.setFont(font, size)
        c.drawString(margin, y, text)
        y -= gap

    line("Renovation estimate", "Helvetica-Bold", 16, 22)
    inputs = result.input_summary
    line(f"{inputs.country} / {inputs.city or '-'} | {inputs.property_age} | {inputs.property_type}")
    line(f"Pricing {result.pricing_version} | {inputs.room_count} rooms | {inputs.total_area:,.2f} m2", gap=20)

    for room in result.rooms:
        line(
            f"Room {room.room_index + 1}: {room.room_type} ({format_quantity(room.area_m2, 'm2')})",
            "Helvetica-Bold",
            11,
        )
        for li in room.line_items:
            label = textwrap.shorten(li.name, width=48, placeholder="...")
            line(
                f"   {label:<50} {format_quantity(li.quantity, li.unit):>14} "
                f"{format_currency(li.cost_before_tax, cur):>12}",
                "Courier",
                8,
                11,
            )
        line(f"   Room subtotal: {format_currency(room.subtotal, cur)}", gap=18)

    if result.project_line_items:
        line("Project items", "Helvetica-Bold", 11)
        for li in result.project_line_items:
            line(
                f"   {li.name:<50} {format_quantity(li.quantity, li.unit):>14} "
                f"{format_currency(li.cost_before_tax, cur):>12}",
                "Courier",
                8,
                11,
            )
        y -= 8

    s = result.summary
    line("Summary", "Helvetica-Bold", 12, 16)
    for label, value in (
        ("Materials", s.materials),
        ("Labor", s.labor),
        ("Equipment", s.equipment),
        ("Overhead", s.overhead),
        ("Contingency", s.contingency),
        ("Subtotal", s.subtotal),
        ("Tax", s.tax_total),
    ):
        line(f"   {label:<14} {format_currency(value, cur):>12}", "Courier", 10)
    line(f"   {'Total':<14} {format_currency(s.total, cur):>12}", "Courier-Bold", 11)
    c.showPage()
    c.save()
    return path


def write_outputs(
    result: Union[ItemizedEstimateResult, QuickEstimateResult],
    output_dir: Path,
    write_breakdown_xlsx: bool = False,
    write_summary_pdf: bool = False,
) -> Dict[str, Path]:
    """Write the estimate artifacts into ``output_dir`` and return their paths by kind."""

    output_dir.mkdir(parents=True, exist_ok=True)
    outputs: Dict[str, Path] = {"json": write_json(result, output_dir / ESTIMATE_JSON)}
    if isinstance(result, QuickEstimateResult):
        return outputs

    audit_path = output_dir / LINE_ITEMS_CSV
    line_items_frame(result).to_csv(audit_path, index=False)
    outputs["audit_csv"] = audit_path
    if write_breakdown_xlsx:
        outputs["xlsx"] = write_xlsx(result, output_dir / BREAKDOWN_XLSX)
    if write_summary_pdf:
        outputs["pdf"] = write_pdf(result, output_dir / SUMMARY_PDF)
    for kind, path in outputs.items():
        logger.debug("Wrote %s => %s", kind, path)
    return outputs


__all__ = ["write_outputs", "write_json", "write_xlsx", "write_pdf"]
