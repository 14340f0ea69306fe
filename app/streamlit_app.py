"""
app/streamlit_app.py

Streamlit dashboard for synthetic electricity carbon emissions.

Responsibilities
----------------
- Let users choose a date range and a data provider.
- Generate the series, falling back to mock data when the provider has no
  implementation, and explain the fallback.
- Display KPIs, a carbon-intensity chart and a stacked generation-mix chart.

Notes
-----
- Every widget change reruns the script and regenerates the series; there is
  no caching or persistence.
- Run with ``streamlit run app/streamlit_app.py`` from the project root.
"""

import sys
from pathlib import Path

import pandas as pd
import streamlit as st

# Allow `import gridmix` when launched via `streamlit run` without installing.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gridmix import config  # noqa: E402
from gridmix.mix import SOURCES  # noqa: E402
from gridmix.providers import Provider, describe_provider, fetch_with_fallback  # noqa: E402
from gridmix.ranges import DateRange  # noqa: E402
from gridmix.transform import summarize, to_frames  # noqa: E402

config.configure_logging()

st.set_page_config(page_title="Electricity Carbon Emissions", layout="wide")

st.title("Electricity Carbon Emissions")
st.caption("Synthetic generation mix and carbon intensity for the Irish grid.")

# ---------------------------
# Controls
# ---------------------------
ranges = list(DateRange)
providers = list(Provider)

col1, col2 = st.columns(2)
with col1:
    date_range = st.selectbox(
        "Date range",
        options=ranges,
        index=ranges.index(DateRange.parse(config.default_range())),
        format_func=lambda r: r.label,
    )
with col2:
    provider = st.selectbox(
        "Data source",
        options=providers,
        index=providers.index(Provider.parse(config.default_provider())),
        format_func=lambda p: p.label,
    )

series, error = fetch_with_fallback(provider, date_range)
if error:
    st.warning(f"{error}. Falling back to mock data for demonstration.")

intensity_df, mix_df = to_frames(series)
stats = summarize(series)

# ---------------------------
# KPIs
# ---------------------------
kpis = st.columns(4)
with kpis[0]:
    st.metric("Points", stats["points"])
with kpis[1]:
    if stats["mean_intensity"] is not None:
        st.metric("Average intensity (gCO₂/kWh)", f"{stats['mean_intensity']:,.0f}")
with kpis[2]:
    if stats["min_intensity"] is not None:
        st.metric(
            "Range (gCO₂/kWh)", f"{stats['min_intensity']:,} – {stats['max_intensity']:,}"
        )
with kpis[3]:
    if stats["mean_renewable_share"] is not None:
        st.metric("Average renewables", f"{stats['mean_renewable_share']:.1%}")

# ---------------------------
# Charts
# ---------------------------
st.subheader("Carbon intensity")
if intensity_df.empty:
    st.info("No intensity data available.")
else:
    st.line_chart(intensity_df)

st.subheader("Generation mix")
if mix_df.empty:
    st.info("No generation data available.")
else:
    # Percent shares read better than fractions on a stacked chart.
    st.area_chart(mix_df.mul(100))

# ---------------------------
# Debug info
# ---------------------------
with st.expander("Debug info"):
    st.write(f"**Data source:** {describe_provider(provider if not error else Provider.MOCK)}")
    st.write(f"Profile: {series.profile}")
    st.write(f"Date range: {date_range.label}")
    if series.mix:
        first = series.mix[0].mix.as_dict()
        st.write(f"First intensity value: {series.intensity[0].grams_co2_per_kwh} gCO₂/kWh")
        first_df = pd.DataFrame(
            {"Share (%)": [round(first[s] * 100, 1) for s in SOURCES]},
            index=[s.title() for s in SOURCES],
        )
        st.table(first_df)
        st.caption(f"Total: {sum(first.values()):.1%}")
