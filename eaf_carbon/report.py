"""Single-page PDF export of the emissions report"""

import logging
from datetime import datetime
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .charts import BRAND_COLORS
from .errors import ExportError
from .formatting import format_summary
from .units import Scale

logger = logging.getLogger(__name__)

REPORT_TITLE = "EAF Carbon Emissions Report"
MARGIN = 40
MAX_WARNING_LINES = 6


def report_filename(now=None):
    now = now or datetime.now()
    return f"EAF_Carbon_Report_{now.strftime('%Y%m%d_%H%M')}.pdf"


def figure_to_png(fig, dpi=150):
    """Rasterise a matplotlib figure to PNG bytes"""
    buffer = BytesIO()
    fig.savefig(buffer, format="png", dpi=dpi, bbox_inches="tight", facecolor="white")
    buffer.seek(0)
    return buffer.getvalue()


def _summary_lines(result):
    s = format_summary(result)
    wan = result.derived.annual_output.to(Scale.TEN_THOUSAND_TONNES).value
    lines = [
        ("Furnace cycles per day", s["daily_furnace_cycles"]),
        ("Daily output", s["daily_output"]),
        ("Annual output", f"{s['annual_output']} ({wan:.4f} x 10,000 t)"),
        ("Hot metal per tonne of steel", s["iron_ratio"]),
        ("Scrap per tonne of steel", s["scrap_amount_ratio"]),
        ("Total emissions (gross)", s["total_emissions"]),
        ("Emission intensity (gross)", s["intensity_kg"]),
    ]
    if result.avoided_emissions > 0:
        lines.append(("Avoided by recovered energy", s["avoided_emissions"]))
        lines.append(("Net emissions", f"{s['net_emissions']} ({s['net_intensity_kg']})"))
    return lines


def _draw_images(c, images, top, bottom, width):
    """Stack images full-width between top and bottom, shrinking all to fit

    Returns the scale applied, or 0 when there is no room and nothing is drawn.
    """
    if top <= bottom:
        logger.warning("No room left on the page for %d image(s)", len(images))
        return 0.0
    readers = [ImageReader(BytesIO(png)) for png in images]
    avail_w = width - 2 * MARGIN
    heights = []
    for reader in readers:
        img_w, img_h = reader.getSize()
        heights.append(img_h * avail_w / img_w)

    gap = 10
    needed = sum(heights) + gap * (len(heights) - 1)
    scale = min(1.0, (top - bottom) / needed) if needed > 0 else 1.0

    y = top
    for reader, h in zip(readers, heights):
        draw_w, draw_h = avail_w * scale, h * scale
        y -= draw_h
        c.drawImage(reader, (width - draw_w) / 2, y, width=draw_w, height=draw_h, mask="auto")
        y -= gap
    return scale


def build_report_pdf(result, figures=(), images=(), title=REPORT_TITLE, generated=None):
    """Assemble the report as a one-page A4 PDF

    :param result: CalculationResult to summarise
    :param figures: matplotlib figures to rasterise onto the page
    :param images: extra pre-rendered PNG bytes
    :return: BytesIO positioned at the start of the document
    :raises ExportError: if rasterising or writing the PDF fails
    """
    try:
        pngs = [figure_to_png(fig) for fig in figures] + list(images)

        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=A4)
        width, height = A4

        # Header
        c.setFillColor(colors.HexColor(BRAND_COLORS["primary"]))
        c.rect(0, height - 80, width, 80, stroke=0, fill=1)
        c.setFillColor(colors.white)
        c.setFont("Helvetica-Bold", 18)
        c.drawString(MARGIN, height - 45, title)
        c.setFont("Helvetica", 10)
        stamp = (generated or datetime.now()).strftime("%Y-%m-%d %H:%M")
        c.drawString(MARGIN, height - 63, f"Generated: {stamp}")

        # Summary
        y = height - 110
        c.setFillColor(colors.black)
        c.setFont("Helvetica-Bold", 13)
        c.drawString(MARGIN, y, "Summary")
        y -= 18
        c.setFont("Helvetica", 10)
        for label, value in _summary_lines(result):
            c.drawString(MARGIN + 20, y, label)
            c.drawString(260, y, value.replace("₂", "2"))
            y -= 14

        if result.warnings:
            y -= 4
            c.setFillColor(colors.HexColor(BRAND_COLORS["error"]))
            c.setFont("Helvetica-Oblique", 8)
            for warning in result.warnings[:MAX_WARNING_LINES]:
                c.drawString(MARGIN + 20, y, f"Warning: {warning.message}"[:120])
                y -= 10
            hidden = len(result.warnings) - MAX_WARNING_LINES
            if hidden > 0:
                c.drawString(MARGIN + 20, y, f"... and {hidden} more warning(s)")
                y -= 10
            c.setFillColor(colors.black)

        if pngs:
            _draw_images(c, pngs, top=y - 10, bottom=MARGIN + 20, width=width)

        c.setFont("Helvetica-Oblique", 8)
        c.setFillColor(colors.HexColor(BRAND_COLORS["muted"]))
        c.drawString(MARGIN, MARGIN, "Indicative estimate based on fixed reference emission factors.")
        c.showPage()
        c.save()
        buffer.seek(0)
    except Exception as exc:
        logger.exception("PDF report export failed")
        raise ExportError(f"Could not build the PDF report: {exc}") from exc

    logger.info("Built PDF report with %d image(s), %d bytes", len(pngs), len(buffer.getvalue()))
    return buffer
