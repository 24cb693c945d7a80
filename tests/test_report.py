"""Tests for charts and the PDF export."""

from datetime import datetime

import matplotlib.pyplot as plt
import pytest

from eaf_carbon.charts import ranked_bar_chart, top_emitters_pie
from eaf_carbon.engine import ProcessParameters, calculate
from eaf_carbon.errors import ExportError
from eaf_carbon.report import (
    MAX_WARNING_LINES,
    _draw_images,
    _summary_lines,
    build_report_pdf,
    figure_to_png,
    report_filename,
)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def test_pie_shows_at_most_top_n(result):
    fig = top_emitters_pie(result, n=3)
    wedges = [p for p in fig.axes[0].patches]
    assert len(wedges) == 3


def test_charts_skip_zero_entries():
    result = calculate(ProcessParameters(steel_charge_ratio=0.0), {"lime": 10, "alloy": 0})
    fig = ranked_bar_chart(result)
    assert len(fig.axes[0].patches) == 1


def test_empty_result_renders_placeholder():
    result = calculate(ProcessParameters(cycle_minutes=0), {})
    fig = top_emitters_pie(result)
    texts = [t.get_text() for t in fig.axes[0].texts]
    assert "No emissions to show" in texts


def test_figure_rasterises_to_png(result):
    png = figure_to_png(ranked_bar_chart(result))
    assert png.startswith(b"\x89PNG")


def test_pdf_report_is_a_pdf(result):
    buffer = build_report_pdf(
        result,
        figures=(top_emitters_pie(result), ranked_bar_chart(result)),
        generated=datetime(2026, 10, 18, 9, 30),
    )
    data = buffer.getvalue()
    assert data.startswith(b"%PDF")
    assert data.rstrip().endswith(b"%%EOF")


def test_pdf_report_with_warnings_and_credits(parameters):
    result = calculate(parameters, {"recovered_steam": 80, "mystery": 2, "lime": -1})
    assert build_report_pdf(result).getvalue().startswith(b"%PDF")


def test_export_failure_raises_export_error(result):
    class BrokenFigure:
        def savefig(self, *args, **kwargs):
            raise RuntimeError("renderer unavailable")

    with pytest.raises(ExportError, match="renderer unavailable"):
        build_report_pdf(result, figures=(BrokenFigure(),))


def test_report_filename():
    assert report_filename(datetime(2026, 10, 18, 13, 5)) == "EAF_Carbon_Report_20261018_1305.pdf"


def test_images_are_skipped_when_no_room_is_left(result):
    class RecordingCanvas:
        def __init__(self):
            self.drawn = []

        def drawImage(self, *args, **kwargs):
            self.drawn.append((args, kwargs))

    c = RecordingCanvas()
    png = figure_to_png(ranked_bar_chart(result))
    assert _draw_images(c, [png], top=50, bottom=60, width=595) == 0.0
    assert c.drawn == []

    scale = _draw_images(c, [png], top=700, bottom=60, width=595)
    assert 0 < scale <= 1
    assert len(c.drawn) == 1
    assert c.drawn[0][1]["height"] > 0


def test_pdf_with_many_warnings_still_builds(parameters):
    unknown = {f"mystery_{i}": 1.0 for i in range(60)}
    result = calculate(parameters, unknown)
    assert len(result.warnings) > MAX_WARNING_LINES

    buffer = build_report_pdf(result, figures=(top_emitters_pie(result), ranked_bar_chart(result)))
    assert buffer.getvalue().startswith(b"%PDF")


def test_summary_marks_headline_figures_as_gross(parameters):
    plain = dict(_summary_lines(calculate(parameters, {"lime": 40})))
    assert "Total emissions (gross)" in plain
    assert "Emission intensity (gross)" in plain
    assert "Net emissions" not in plain

    credited = dict(_summary_lines(calculate(parameters, {"lime": 40, "recovered_steam": 80})))
    assert "Avoided by recovered energy" in credited
    assert "Net emissions" in credited
