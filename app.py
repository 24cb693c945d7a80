# app.py — EAF Carbon Emissions Calculator
# Single-page Streamlit front end: process inputs, emissions breakdown, PDF export

import logging
from datetime import datetime

import streamlit as st
import matplotlib as mpl
import matplotlib.pyplot as plt

from eaf_carbon.charts import BRAND_COLORS, ranked_bar_chart, top_emitters_pie
from eaf_carbon.engine import TOP_N, calculate
from eaf_carbon.errors import ExportError, WarningKind
from eaf_carbon.factors import REFERENCE_TABLE
from eaf_carbon.formatting import (
    credits_table,
    display_table,
    emissions_csv,
    format_summary,
    warnings_table,
)
from eaf_carbon.inputs import (
    DEFAULT_PARAMETERS,
    PARAMETER_LABELS,
    intensities_from_mapping,
    parameters_from_mapping,
)
from eaf_carbon.report import build_report_pdf, report_filename

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("eaf_carbon.app")

mpl.rcParams["figure.facecolor"] = "none"
mpl.rcParams["axes.facecolor"] = "none"

PARAM_KEY = "param_{}"
INTENSITY_KEY = "intensity_{}"

# ==================== SESSION STATE INITIALIZATION ====================

def init_session_state():
    """Initialize all form fields with defaults"""
    for name, value in DEFAULT_PARAMETERS.items():
        key = PARAM_KEY.format(name)
        if key not in st.session_state:
            st.session_state[key] = f"{value:g}"

    for material in REFERENCE_TABLE.entered_materials():
        key = INTENSITY_KEY.format(material.name)
        if key not in st.session_state:
            st.session_state[key] = ""


def reset_session_state():
    """Drop every form field so defaults are restored on rerun"""
    for key in list(st.session_state.keys()):
        del st.session_state[key]

# ==================== HELPER FUNCTIONS ====================

def read_parameters():
    """Snapshot the process-parameter fields"""
    raw = {name: st.session_state.get(PARAM_KEY.format(name)) for name in DEFAULT_PARAMETERS}
    return parameters_from_mapping(raw)


def read_intensities():
    """Snapshot the per-material intensity fields"""
    raw = {
        m.name: st.session_state.get(INTENSITY_KEY.format(m.name))
        for m in REFERENCE_TABLE.entered_materials()
    }
    return intensities_from_mapping(raw)

# ==================== UI COMPONENTS ====================

def apply_brand_theme():
    """Apply the light professional theme"""
    css = f"""
    <style>
      @import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap');

      html, body, [data-testid="stAppViewContainer"], .stApp {{
        font-family: 'Inter', sans-serif;
        color: {BRAND_COLORS["text"]};
      }}

      h1, h2, h3 {{
        color: {BRAND_COLORS["primary"]} !important;
        font-weight: 700 !important;
      }}

      [data-testid="stMetricValue"] {{
        color: {BRAND_COLORS["secondary"]} !important;
        font-weight: 700 !important;
      }}

      .stButton > button, .stDownloadButton > button {{
        border-radius: 10px !important;
        font-weight: 600 !important;
      }}

      .tagline {{
        color: {BRAND_COLORS["muted"]};
        font-size: 1.05rem;
        padding-top: 0.6rem;
      }}
    </style>
    """
    st.markdown(css, unsafe_allow_html=True)


def show_brand_bar():
    """Display the header bar"""
    c1, c2 = st.columns([3, 1])
    with c1:
        st.markdown("### **EAF CARBON CALCULATOR**")
        st.markdown("<div class='tagline'>CO₂ emissions estimate for electric-arc-furnace steelmaking.</div>",
                    unsafe_allow_html=True)
    with c2:
        if st.button("🔄 Reset inputs", key="reset_top", use_container_width=True):
            reset_session_state()
            st.rerun()


def show_parameter_inputs():
    """Process parameter fields"""
    st.subheader("⚙️ Process Parameters")
    st.caption("Use \".\" for decimals. Commas are read only as thousands separators (1,234.5); \"1,5\" is rejected and counts as 0.")
    cols = st.columns(len(DEFAULT_PARAMETERS))
    for col, name in zip(cols, DEFAULT_PARAMETERS):
        col.text_input(PARAMETER_LABELS[name], key=PARAM_KEY.format(name))


def show_intensity_inputs():
    """One intensity field per user-entered material"""
    st.subheader("🧪 Consumption per Tonne of Steel")
    st.caption("Hot metal and scrap are derived from the charge ratio and scrap ratio above. Use \".\" for decimals.")
    materials = REFERENCE_TABLE.entered_materials()
    cols = st.columns(4)
    for i, material in enumerate(materials):
        cols[i % 4].text_input(
            f"{material.label} ({material.display_unit})",
            key=INTENSITY_KEY.format(material.name),
            placeholder="0",
        )


def show_warnings(result):
    """Surface recovered input problems without stopping the page"""
    if result.ok:
        return
    invalid = result.warnings_of(WarningKind.INVALID_PARAMETER)
    unknown = result.warnings_of(WarningKind.UNKNOWN_MATERIAL)
    if invalid:
        st.warning("⚠️ Some inputs were out of range and replaced with safe values.")
    if unknown:
        st.warning("⚠️ Some materials have no emission factor and were counted as zero.")
    with st.expander("View input warnings", expanded=False):
        st.dataframe(warnings_table(result), use_container_width=True, hide_index=True)


def show_summary(result):
    """Headline production and emission figures"""
    s = format_summary(result)

    st.subheader("🏭 Production")
    p1, p2, p3, p4 = st.columns(4)
    p1.metric("Furnace cycles per day", s["daily_furnace_cycles"])
    p2.metric("Daily output", s["daily_output"])
    p3.metric("Annual output", s["annual_output_wan"], help=s["annual_output"])
    p4.metric("Annual charge demand", s["annual_charge_demand"])

    r1, r2 = st.columns(2)
    r1.write(f"Hot metal per tonne of steel: **{s['iron_ratio']}**")
    r2.write(f"Scrap per tonne of steel: **{s['scrap_amount_ratio']}**")

    st.subheader("🌍 Emissions")
    e1, e2, e3 = st.columns(3)
    e1.metric("Total emissions (gross)", s["total_emissions"],
              help="Before any recovered-energy credit")
    e2.metric("Emission intensity (gross)", s["intensity_kg"],
              help=f"{s['intensity_t']}, before any recovered-energy credit")
    if result.avoided_emissions > 0:
        e3.metric("Net of recovered energy", s["net_emissions"], help=s["net_intensity_kg"])

# ==================== PAGE ====================

st.set_page_config(page_title="EAF Carbon Emissions Calculator", layout="wide")
apply_brand_theme()
init_session_state()
show_brand_bar()

show_parameter_inputs()
st.markdown("---")
show_intensity_inputs()
st.markdown("---")

result = calculate(read_parameters(), read_intensities())
logger.info("Recalculated: total %.2f t CO2, %d warning(s)", result.total_emissions, len(result.warnings))

st.title("📊 Emissions Report")
show_warnings(result)
show_summary(result)

pie_per_ton = top_emitters_pie(result, TOP_N, per_ton=True)
pie_total = top_emitters_pie(result, TOP_N)
bars = ranked_bar_chart(result)

c1, c2 = st.columns(2)
with c1:
    st.pyplot(pie_per_ton)
with c2:
    st.pyplot(pie_total)
st.pyplot(bars)

with st.expander("📋 View Full Breakdown", expanded=True):
    st.dataframe(display_table(result), use_container_width=True, hide_index=True)
    if result.avoided_emissions > 0:
        st.markdown("#### Recovered energy credits")
        st.dataframe(credits_table(result), use_container_width=True, hide_index=True)

# Downloads
st.markdown("---")
st.subheader("📥 Download Report")
d1, d2 = st.columns(2)

try:
    pdf_buffer = build_report_pdf(result, figures=(pie_total, bars), generated=datetime.now())
    d1.download_button(
        label="📄 Download PDF Report",
        data=pdf_buffer.getvalue(),
        file_name=report_filename(),
        mime="application/pdf",
        use_container_width=True,
    )
except ExportError as export_error:
    d1.error(f"Error generating PDF report: {export_error}")
    d1.info("The calculation above is unaffected; adjust the inputs and try again.")

d2.download_button(
    label="📑 Download Breakdown (CSV)",
    data=emissions_csv(result),
    file_name=f"EAF_Carbon_Breakdown_{datetime.now().strftime('%Y%m%d_%H%M')}.csv",
    mime="text/csv",
    use_container_width=True,
)

plt.close("all")
