from __future__ import annotations

import logging

import streamlit as st
import pandas as pd
import plotly.graph_objects as go

from weilao.models import Inputs, TEXT_FIELDS, default_inputs, demo_inputs
from weilao.engine import compute
from weilao.inputs import clamp_field, parse_number, PERCENT_FIELDS, INTEGER_FIELDS
from weilao.i18n import t, LANGUAGES, LANGUAGE_NAMES
from weilao.tables import cost_chart_frame, breakdown_frame, summary_rows, audit_frame, sensitivity_frame
from weilao.formatting import fmt_number
from weilao.report import build_pdf
from weilao import settings

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s - [%(levelname)s] - %(name)s - %(message)s")
logger = logging.getLogger(__name__)


# ----------------------------
# Input helpers
# ----------------------------
def widget_value(key: str):
    # inputs_dict value in the type the widget expects; no clamping here
    v = st.session_state.inputs_dict.get(key)
    if key in TEXT_FIELDS:
        return "" if v is None else str(v)
    if key in INTEGER_FIELDS:
        return int(parse_number(v))
    return float(parse_number(v))


def on_edit(key: str):
    # clamp only when the user changes a field, and show the clamped value
    wkey = f"in_{key}"
    val = clamp_field(key, st.session_state[wkey])
    st.session_state.inputs_dict[key] = val
    st.session_state[wkey] = widget_value(key)


def text_field(col, key: str, lang: str):
    wkey = f"in_{key}"
    if wkey not in st.session_state:
        st.session_state[wkey] = widget_value(key)
    col.text_input(t(lang, f"label.{key}"), key=wkey, on_change=on_edit, args=(key,))


def number_field(col, key: str, lang: str, suffix: str = ""):
    label = t(lang, f"label.{key}")
    if suffix:
        label = f"{label} ({suffix})"
    wkey = f"in_{key}"
    if wkey not in st.session_state:
        st.session_state[wkey] = widget_value(key)
    if key in INTEGER_FIELDS:
        col.number_input(label, step=1, key=wkey, on_change=on_edit, args=(key,))
    elif key in PERCENT_FIELDS:
        col.number_input(label, step=1.0, key=wkey, on_change=on_edit, args=(key,))
    else:
        col.number_input(label, step=1.0, format="%.2f", key=wkey, on_change=on_edit, args=(key,))


def load_snapshot(inputs: Inputs):
    st.session_state.inputs_dict = inputs.to_dict()
    for key in st.session_state.inputs_dict:
        st.session_state[f"in_{key}"] = widget_value(key)


def card(title: str, rows):
    st.markdown(f"**{title}**")
    st.dataframe(pd.DataFrame(rows, columns=["", " "]), use_container_width=True, hide_index=True)


# ----------------------------
# App
# ----------------------------
st.set_page_config(page_title="危老重建試算", layout="wide")

if "lang" not in st.session_state:
    st.session_state.lang = settings.DEFAULT_LANG
if "inputs_dict" not in st.session_state:
    st.session_state.inputs_dict = (demo_inputs() if settings.START_WITH_DEMO else default_inputs()).to_dict()

with st.sidebar:
    st.header(t(st.session_state.lang, "section.settings"))
    st.session_state.lang = st.selectbox(
        t(st.session_state.lang, "section.language"),
        list(LANGUAGES),
        index=list(LANGUAGES).index(st.session_state.lang),
        format_func=lambda l: LANGUAGE_NAMES[l],
    )
    lang = st.session_state.lang
    st.divider()
    st.button(t(lang, "action.loadDemo"), use_container_width=True, on_click=load_snapshot, args=(demo_inputs(),))
    st.button(t(lang, "action.reset"), use_container_width=True, on_click=load_snapshot, args=(default_inputs(),))

lang = st.session_state.lang
ccy = settings.CURRENCY_LABEL
st.title(t(lang, "app.title"))
st.caption(t(lang, "app.caption"))

left, right = st.columns([0.42, 0.58], gap="large")

with left:
    tabs = st.tabs([t(lang, "tab.basic"), t(lang, "tab.regulations"), t(lang, "tab.costs"), t(lang, "tab.sales")])

    with tabs[0]:
        c1, c2 = st.columns(2)
        text_field(c1, "section", lang)
        text_field(c2, "lot_number", lang)
        text_field(st, "zoning", lang)
        number_field(st, "area", lang, t(lang, "unit.m2"))
        c1, c2 = st.columns(2)
        number_field(c1, "bc_ratio", lang, "%")
        number_field(c2, "far", lang, "%")
        c1, c2 = st.columns(2)
        number_field(c1, "floors", lang, t(lang, "unit.floors"))
        number_field(c2, "basement", lang, t(lang, "unit.floors"))
        c1, c2 = st.columns(2)
        number_field(c1, "roof_layers", lang, t(lang, "unit.floors"))
        number_field(c2, "height", lang, t(lang, "unit.m"))
        number_field(st, "excavate", lang, "%")
        number_field(st, "road_width", lang, t(lang, "unit.m"))

    with tabs[1]:
        for key in ("mech", "stair", "balcony", "roof"):
            number_field(st, key, lang, "%")

    with tabs[2]:
        st.info(t(lang, "section.note"))
        number_field(st, "build_cost", lang, t(lang, "unit.perPing"))
        number_field(st, "legal_cost", lang, t(lang, "unit.perM2"))
        for key in ("plan_fee", "eval_fee", "boundary_fee", "drill_fee", "neighbor_fee"):
            number_field(st, key, lang)

    with tabs[3]:
        number_field(st, "common", lang, "%")
        c1, c2 = st.columns(2)
        number_field(c1, "park_size", lang, t(lang, "unit.ping"))
        number_field(c2, "park_price", lang, t(lang, "unit.currency"))
        number_field(st, "price_1f", lang, t(lang, "unit.perPing"))
        number_field(st, "price_2f", lang, t(lang, "unit.perPing"))
        number_field(st, "old_ping", lang, t(lang, "unit.ping"))
        c1, c2 = st.columns(2)
        number_field(c1, "new_units", lang, t(lang, "unit.units"))
        number_field(c2, "owners", lang, t(lang, "unit.people"))
        number_field(st, "sell_percent", lang, "%")

inputs = Inputs.from_dict(st.session_state.inputs_dict)
result = compute(inputs)

with right:
    eq = result.equity
    verdict = t(lang, "result.congrats") if eq.is_one_for_one else t(lang, "result.notYet")
    m1, m2, m3 = st.columns(3)
    m1.metric(t(lang, "result.exchange"), fmt_number(eq.ping_exchange, 4))
    m2.metric(t(lang, "row.returnIndoor"), f"{fmt_number(eq.return_indoor)} {t(lang, 'unit.ping')}")
    m3.metric(t(lang, "row.commonBurden"), f"{fmt_number(result.revenue.common_burden_pct, 1)}%")
    if eq.is_one_for_one:
        st.success(verdict)
    else:
        st.warning(verdict)

    out_tabs = st.tabs([t(lang, "tab.dashboard"), t(lang, "tab.sensitivity"), t(lang, "tab.audit"), t(lang, "tab.report")])
    cards = summary_rows(result, lang)

    with out_tabs[0]:
        st.markdown(f"### {t(lang, 'card.costDist')}")
        df_cost = cost_chart_frame(result, lang)
        if not df_cost.empty:
            fig = go.Figure(data=[go.Pie(
                labels=df_cost["label"],
                values=df_cost["value"],
                hole=0.55,
                marker=dict(colors=list(df_cost["color"])),
                sort=False,
            )])
            fig.update_layout(height=320, margin=dict(l=10, r=10, t=10, b=10))
            st.plotly_chart(fig, use_container_width=True)
        card(t(lang, "card.costDist"), cards["costs"])

        with st.expander(t(lang, "card.breakdown"), expanded=False):
            df_bd = breakdown_frame(result, lang)
            st.dataframe(
                df_bd[["label", "display"]].rename(columns={"label": "", "display": t(lang, "unit.wan")}),
                use_container_width=True,
                hide_index=True,
            )

        c1, c2 = st.columns(2)
        with c1:
            card(t(lang, "card.areas"), cards["areas"])
            card(t(lang, "card.sales"), cards["sales"])
        with c2:
            card(t(lang, "card.revenue"), cards["revenue"])
            card(t(lang, "card.equity"), cards["equity"])

    with out_tabs[1]:
        st.caption(t(lang, "sensitivity.caption"))
        df_sens = sensitivity_frame(inputs)
        heat = go.Figure(data=go.Heatmap(
            z=df_sens.values,
            x=list(df_sens.columns),
            y=list(df_sens.index),
            hovertemplate="Price: %{y}<br>Cost: %{x}<br>Burden: %{z:.1f}%<extra></extra>",
        ))
        heat.update_layout(height=360, margin=dict(l=10, r=10, t=10, b=10))
        st.plotly_chart(heat, use_container_width=True)
        st.dataframe(df_sens.round(2), use_container_width=True)

    with out_tabs[2]:
        df_a = audit_frame(result, ccy)
        st.dataframe(df_a[["section", "key", "display"]], use_container_width=True, hide_index=True)

    with out_tabs[3]:
        pdf_bytes = build_pdf(inputs, result, lang, ccy)
        name = (inputs.lot_number or inputs.section or "site").replace(" ", "_")
        st.download_button(
            t(lang, "action.downloadPdf"),
            data=pdf_bytes,
            file_name=f"weilao_{name}.pdf",
            mime="application/pdf",
            use_container_width=True,
        )
