"""Streamlit interface for BetBuddy."""

from __future__ import annotations

from collections.abc import Sequence

import streamlit as st

from betbuddy.config import get_settings
from betbuddy.parsing.narrative import NarrativeParseResult, parse_narrative
from betbuddy.rendering.view import (
    AnalysisField,
    LegView,
    OverviewView,
    SummaryView,
    build_view,
)
from betbuddy.ui.upload import ACCEPTED_EXTENSIONS, UploadError, submit_slip

settings = get_settings()

# streamlit has no amber; orange is the closest named colour
STREAMLIT_COLORS = {"red": "red", "amber": "orange", "green": "green", "blue": "blue"}

st.set_page_config(page_title="BetBuddy", layout="centered", page_icon="🎟️")
st.title("🎟️ BetBuddy")
st.caption("Your AI sports betting analyst. Entertainment purposes only.")


def init_state() -> None:
    st.session_state.setdefault("uploader_key", 0)
    st.session_state.setdefault("in_flight", False)
    st.session_state.setdefault("result", None)
    st.session_state.setdefault("error", None)
    st.session_state.setdefault("error_raw", None)


def reset() -> None:
    # a fresh widget key drops the uploaded file and its preview
    st.session_state.uploader_key += 1
    st.session_state.result = None
    st.session_state.error = None
    st.session_state.error_raw = None


def start_upload() -> None:
    st.session_state.in_flight = True
    st.session_state.error = None
    st.session_state.error_raw = None


def render_landing() -> None:
    st.write(
        "Upload your parlay slip and get an AI-powered breakdown of every leg, "
        "plus an overall risk assessment."
    )
    cols = st.columns(3)
    cols[0].markdown("**Upload Slip**  \nSimply upload a photo of your parlay slip")
    cols[1].markdown("**AI Analysis**  \nOur AI analyzes each leg of your parlay")
    cols[2].markdown("**Get Insights**  \nReceive detailed insights and a risk rating")


def render_upload_form(api_url: str) -> None:
    st.subheader("Upload Your Parlay Slip")
    if st.session_state.error:
        st.error(st.session_state.error)
        if st.session_state.error_raw:
            st.markdown("**Raw Response:**")
            st.code(st.session_state.error_raw, language=None)

    in_flight = st.session_state.in_flight
    uploaded = st.file_uploader(
        "Drag & drop your parlay slip image here",
        type=ACCEPTED_EXTENSIONS,
        accept_multiple_files=False,
        key=f"slip_{st.session_state.uploader_key}",
        disabled=in_flight,
        help="Supports JPG, PNG, WEBP",
    )
    if uploaded is not None:
        st.image(uploaded, caption="Parlay slip preview")

    cols = st.columns([1, 1, 3])
    if uploaded is not None:
        cols[0].button("Reset", on_click=reset, disabled=in_flight)
    cols[1].button(
        "Analyzing..." if in_flight else "Analyze Slip",
        type="primary",
        on_click=start_upload,
        disabled=uploaded is None or in_flight,
    )

    if in_flight:
        with st.spinner("Reading your slip and researching every leg..."):
            try:
                st.session_state.result = submit_slip(
                    getattr(uploaded, "name", None),
                    uploaded.getvalue() if uploaded is not None else None,
                    getattr(uploaded, "type", None),
                    base_url=api_url,
                )
            except UploadError as exc:
                st.session_state.error = str(exc)
                st.session_state.error_raw = exc.raw_text
            finally:
                st.session_state.in_flight = False
        st.rerun()

    st.markdown("##### Tips for best results")
    st.markdown(
        "- Make sure the entire slip is visible in the photo\n"
        "- Ensure good lighting to avoid shadows\n"
        "- Avoid blurry images; take a clear, focused photo\n"
        "- Include all relevant information (teams, odds, bet type)"
    )


def render_parse_failure(parsed: NarrativeParseResult) -> None:
    st.error(f"**Error processing analysis data**  \n{parsed.error}")
    st.markdown("**Raw Response:**")
    st.code(parsed.raw_text, language=None)


def render_summary(summary: SummaryView) -> None:
    cols = st.columns(4)
    cols[0].metric("Sportsbook", summary.sportsbook)
    cols[1].metric("Wager", summary.wager)
    cols[2].metric("Potential Payout", summary.potential_payout)
    cols[3].metric("Total Odds", summary.total_odds)


def render_overview(overview: OverviewView) -> None:
    with st.container(border=True):
        st.subheader("Parlay Overview")
        color = STREAMLIT_COLORS.get(overview.risk_color, "blue")
        st.markdown(f"**Risk Assessment:** :{color}[{overview.risk_assessment}]")
        st.markdown(f"**Total Legs:** {overview.total_legs}")
        st.markdown(f"**Cash Out Offer:** {overview.cash_out_offer}")
        if overview.grade:
            st.markdown(
                f"**Confidence Grade:** {overview.grade.grade} ({overview.grade.confidence}%)"
            )
        st.markdown("**Comprehensive Analysis**")
        st.info(overview.comprehensive_analysis)


def render_analysis_fields(fields: Sequence[AnalysisField]) -> None:
    for node in fields:
        if node.children:
            st.markdown(f"**{node.label}**")
            with st.container(border=True):
                render_analysis_fields(node.children)
        elif node.text:
            st.caption(node.label.upper())
            st.markdown(node.text)


def render_legs(legs: Sequence[LegView]) -> None:
    st.subheader("Bet Details")
    if not legs:
        st.caption("No legs were returned for this slip.")
    for leg in legs:
        with st.expander(f"{leg.event}  ·  {leg.bet_type}  ·  {leg.odds}"):
            st.markdown(f"**Selection:** `{leg.selection}`")
            if leg.analysis_text or leg.analysis_fields:
                st.markdown("#### Analysis")
                if leg.analysis_text:
                    st.markdown(leg.analysis_text)
                render_analysis_fields(leg.analysis_fields)


def render_citations(lines: Sequence[str]) -> None:
    with st.container(border=True):
        st.subheader("Sources & References")
        st.markdown("\n".join(lines))


def render_results(result: dict) -> None:
    header, action = st.columns([3, 1])
    header.subheader("Analysis Results")
    action.button("Analyze Another Slip", on_click=reset, use_container_width=True)

    parsed = parse_narrative(result.get("narrativeText") or "", result.get("citations"))
    if not parsed.ok:
        render_parse_failure(parsed)
        return
    view = build_view(parsed.analysis)
    render_summary(view.summary)
    render_overview(view.overview)
    render_legs(view.legs)
    render_citations(view.citation_lines)


# ----- Sidebar Controls -------------------------------------------------------
init_state()
with st.sidebar:
    api_url = st.text_input("Analysis API", value=settings.api_base_url)
    st.caption(f"Vision model: {settings.vision_model}")
    st.caption(f"Narrative model: {settings.narrative_model}")

# ----- Page Layout ------------------------------------------------------------
if st.session_state.result is None:
    render_landing()
    render_upload_form(api_url)
else:
    render_results(st.session_state.result)
