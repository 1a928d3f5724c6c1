"""SRS pricing review dashboard (Streamlit).

Run with:
    streamlit run src/srs_pricing/dashboard/app.py

Layout: sidebar scenario inputs → headline prices, margins behind the
shared password, per-term comparison table, price-vs-commitment chart.
Reads EngineConfig from SRS_PRICING_CONFIG (YAML) when set; never writes it.
"""

from __future__ import annotations

import os

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from srs_pricing.api.settings import get_settings
from srs_pricing.config import EngineConfig, QuoteScenario
from srs_pricing.config.loader import load_engine_config
from srs_pricing.engine.quote import compute_quote, compute_term_table
from srs_pricing.errors import PricingError


@st.cache_resource
def _load_config() -> EngineConfig:
    path = os.environ.get("SRS_PRICING_CONFIG")
    return load_engine_config(path) if path else EngineConfig()


config = _load_config()

st.set_page_config(page_title="SRS Contract Pricing", layout="wide")
st.title("SRS Contract Pricing")

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
st.sidebar.header("Commitment")
monthly_rate = st.sidebar.slider("Units per month", 1, 50, 15)
commit_years = st.sidebar.slider("Commitment (years)", 1, 10, 3)
contract_years = st.sidebar.selectbox(
    "Contract length (years)", config.contract_terms,
    index=len(config.contract_terms) - 1,
)
existing_fleet = st.sidebar.number_input(
    "Existing installed base", min_value=0, value=int(config.fleet.existing_units), step=10,
)
password = st.sidebar.text_input("Margins password", type="password")
show_margins = password == get_settings().lock_password

scenario = QuoteScenario(
    monthly_rate=monthly_rate,
    commit_years=commit_years,
    contract_years=contract_years,
    existing_fleet_units=existing_fleet,
)

try:
    quote = compute_quote(config, scenario)
except PricingError as exc:
    st.error(str(exc))
    st.stop()

# ---------------------------------------------------------------------------
# Headline prices
# ---------------------------------------------------------------------------
c1, c2, c3, c4 = st.columns(4)
c1.metric("Year 1", f"${quote.year1_price:,.0f}", f"-{quote.discounts.total_y1:.1%}", delta_color="off")
c2.metric("Year 2+ / yr", f"${quote.year2_price:,.0f}", f"-{quote.discounts.total_y2:.1%}", delta_color="off")
c3.metric(f"{contract_years}-year total", f"${quote.contract_price:,.0f}")
c4.metric("Annual average", f"${quote.annual_average:,.0f}")

st.caption(
    f"{quote.discounts.total_units:,.0f} units committed · "
    f"volume discount {quote.discounts.volume:.1%} (Year 1: {quote.discounts.volume_y1:.1%}) · "
    f"contract discount {quote.discounts.contract:.0%}"
)

if show_margins:
    st.subheader("Margins")
    m = quote.margins
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Year 1", f"{m.year1:.1%}", "below target" if m.year1_below_target else None, delta_color="inverse")
    m2.metric("Year 2+ (direct)", f"{m.year2:.1%}")
    m3.metric("Year 2+ (loaded)", f"{m.year2_with_overhead:.1%}",
              "below target" if m.year2_below_target else None, delta_color="inverse")
    m4.metric("Contract", f"{m.contract:.1%}")
    peak_ftes = max(quote.costs.support_ftes_by_year.values())
    st.caption(f"Peak support staffing: {peak_ftes:.1f} FTE")
    with st.expander("Cost detail"):
        st.json(quote.costs.model_dump())

# ---------------------------------------------------------------------------
# Contract-length comparison
# ---------------------------------------------------------------------------
st.subheader("By contract length")
terms = compute_term_table(config, monthly_rate, commit_years, existing_fleet)
st.dataframe(
    pd.DataFrame([t.model_dump() for t in terms]).rename(columns={
        "contract_years": "Years",
        "contract_discount": "Contract disc.",
        "year1_price": "Year 1",
        "year2_price_raw": "Year 2+ (raw)",
        "year2_price": "Year 2+",
        "contract_price": "Total",
        "annual_average": "Annual avg",
    }),
    hide_index=True,
    use_container_width=True,
)

# ---------------------------------------------------------------------------
# Price vs commitment
# ---------------------------------------------------------------------------
st.subheader("Year 2+ price vs commitment length")
fig = go.Figure()
for term in config.contract_terms:
    if term <= 1:
        continue
    ys = []
    for years in range(1, 11):
        try:
            ys.append(compute_quote(config, scenario.model_copy(
                update={"commit_years": years, "contract_years": term},
            )).year2_price)
        except PricingError:
            ys.append(None)
    fig.add_trace(go.Scatter(x=list(range(1, 11)), y=ys, mode="lines+markers", name=f"{term}-yr"))
fig.update_layout(xaxis_title="Commitment (years)", yaxis_title="$ / unit / year", height=380)
st.plotly_chart(fig, use_container_width=True)
