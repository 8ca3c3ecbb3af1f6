"""
Streamlit Frontend for Ledger Viewer

Three pages:
1. Activities: month-grouped table with a live search box
2. Stats Per Month: one spend chart per configured tag
3. Tag Patterns: the statement patterns used for tagging

The page never decides what to show on its own: the activities table
is drawn from the LedgerView result and its view state only.
"""

import asyncio
from html import escape

import pandas as pd
import streamlit as st

from ledgerview.config import get_settings, validate_all_settings
from ledgerview.models.view import DisplayModel, LoadErrorState, ViewState
from ledgerview.orchestrator import (
    LedgerLoadFlow,
    SpendChartFlow,
    TagPatternFlow,
    create_app_components,
)
from ledgerview.presentation import LedgerView, ViewAssembler


# Page configuration
st.set_page_config(
    page_title="Ledger Viewer",
    page_icon="📒",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Band and amount classes used by the activities table
st.markdown("""
<style>
    table.activities {
        width: 100%;
        border-collapse: collapse;
    }
    table.activities th, table.activities td {
        padding: 4px 8px;
        text-align: left;
    }
    tr.band-a {
        background-color: #ffffff;
    }
    tr.band-b {
        background-color: #eef2f7;
    }
    td.amount-plus {
        color: #28a745;
        text-align: right;
    }
    td.amount-minus {
        color: #dc3545;
        text-align: right;
    }
    .month-label {
        font-weight: bold;
    }
    .month-stats {
        font-size: 0.85em;
        color: #555555;
    }
    .error-box {
        padding: 20px;
        background-color: #f8d7da;
        border-radius: 10px;
        border-left: 5px solid #dc3545;
        margin: 10px 0;
    }
</style>
""", unsafe_allow_html=True)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components():
    """Get or create application components (cached)."""
    load_flow, pattern_flow, chart_flow, _ = create_app_components()
    return load_flow, pattern_flow, chart_flow


def get_ledger_view(load_flow: LedgerLoadFlow) -> LedgerView:
    """One LedgerView per browser session, loaded on first use."""
    if "ledger_view" not in st.session_state:
        view = LedgerView(assembler=ViewAssembler(get_settings().view))
        with st.spinner("Loading activities..."):
            run_async(load_flow.load_into(view))
        st.session_state.ledger_view = view
    return st.session_state.ledger_view


def main():
    """Main application entry point."""
    load_flow, pattern_flow, chart_flow = get_components()

    # Sidebar navigation
    st.sidebar.title("📒 Ledger Viewer")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📋 Activities", "📊 Stats Per Month", "🏷️ Tag Patterns"],
        index=0,
    )

    st.sidebar.markdown("---")
    st.sidebar.markdown(
        """
        **Search tips:**
        - Part of a statement, an amount or a date (`2024-01`)
        - A tag name (`edf`)
        - `null` for activities without tags
        """
    )

    if st.sidebar.button("🔄 Reload data"):
        st.session_state.pop("ledger_view", None)
        st.rerun()

    # Route to appropriate page
    if page == "📋 Activities":
        render_activities_page(load_flow)
    elif page == "📊 Stats Per Month":
        render_stats_page(chart_flow)
    elif page == "🏷️ Tag Patterns":
        render_tag_patterns_page(pattern_flow)


def render_error(message: str):
    st.markdown(f"""
    <div class="error-box">
        <p>{escape(message)}</p>
    </div>
    """, unsafe_allow_html=True)


def activities_table_html(model: DisplayModel) -> str:
    """HTML table for a NORMAL display model."""
    header = "".join(f"<th>{escape(column)}</th>" for column in model.columns)

    body = []
    for row in model.rows:
        if row.leading_cell:
            label, plus, minus = row.leading_cell
            leading = (
                f'<span class="month-label">{escape(label)}</span><br>'
                f'<span class="month-stats">{escape(plus)} / {escape(minus)}</span>'
            )
        else:
            leading = ""

        body.append(
            f'<tr class="{row.band_class.value}">'
            f"<td>{leading}</td>"
            f"<td>{escape(row.date)}</td>"
            f"<td>{escape(row.statement)}</td>"
            f"<td>{escape(row.tags)}</td>"
            f'<td class="{row.amount_class.value}">{escape(row.amount)}</td>'
            "</tr>"
        )

    return (
        '<table class="activities">'
        f"<thead><tr>{header}</tr></thead>"
        f"<tbody>{''.join(body)}</tbody>"
        "</table>"
    )


def render_activities_page(load_flow: LedgerLoadFlow):
    """Render the activities page."""
    st.title("📋 Activities")

    view = get_ledger_view(load_flow)

    st.text_input(
        "Search:",
        key="search",
        placeholder="e.g., edf, -42.5, 2024-01-15, null",
    )
    search = st.session_state.search
    if search != view.search:
        view.on_search_string_changed(search)

    result = view.result

    if isinstance(result, LoadErrorState):
        if result.state == ViewState.NO_DATA:
            st.info(result.message)
        else:
            render_error(result.message)
            if view.snapshot and view.snapshot.errors:
                with st.expander("Details"):
                    for source, error in view.snapshot.errors.items():
                        st.markdown(f"**{source}:** {error}")
        return

    col1, col2 = st.columns(2)
    with col1:
        st.markdown(f"**{result.caption_date}**")
    with col2:
        st.markdown(f"**{result.caption_amount}**")

    if result.state == ViewState.NO_RESULT:
        st.info("No result matching")
        return

    st.markdown(activities_table_html(result), unsafe_allow_html=True)


def render_stats_page(chart_flow: SpendChartFlow):
    """Render one bar chart per chart tag."""
    st.title("📊 Stats Per Month")

    with st.spinner("Loading stats..."):
        series_list = run_async(chart_flow.load())

    currency_symbol = get_settings().view.currency_symbol

    for tag, series in zip(chart_flow.chart_tags, series_list):
        st.subheader(tag)
        if series is None:
            render_error("Error while loading page: can not reach data source")
            continue
        if not series.data:
            st.info(f"No spending recorded for {tag}")
            continue

        label = series.dataset_label(currency_symbol)
        frame = pd.DataFrame(
            {label: [float(value) for value in series.values()]},
            index=pd.Index(series.labels(), name="Month"),
        )
        st.bar_chart(frame, height=280)


def render_tag_patterns_page(pattern_flow: TagPatternFlow):
    """Render the tag pattern table."""
    st.title("🏷️ Tag Patterns")

    with st.spinner("Loading tag patterns..."):
        rows = run_async(pattern_flow.load())

    if rows is None:
        render_error("Error while loading page: can not reach data source")
        status = validate_all_settings()
        if not status.get("api", False):
            st.error(f"❌ API settings - {status.get('api_error', 'Not configured')}")
        return

    frame = pd.DataFrame(
        [{"Pattern": row.pattern, "Tags": row.tags} for row in rows],
        columns=["Pattern", "Tags"],
    )
    st.dataframe(frame, hide_index=True)


if __name__ == "__main__":
    main()
