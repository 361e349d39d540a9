"""Streamlit UI: job recommender and resume analyzer."""
from __future__ import annotations

import asyncio
import sys
import tempfile
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from resumefit.analyzer import analyze_resume, metric_config, score_band
from resumefit.checklist import build_presence_checklist
from resumefit.errors import ResumeFitError
from resumefit.log import get_logger
from resumefit.oracle import OracleGate, initialize_default
from resumefit.recommender import recommend_jobs
from resumefit.resume_parser import extract_text

log = get_logger(__name__)

# ── Helpers ──────────────────────────────────────────────────────────────


def _gate() -> OracleGate:
    # One oracle per script run: its async client must not outlive the
    # event loop that asyncio.run creates for the request.
    gate = OracleGate()
    initialize_default(gate)
    return gate


def _uploaded_text(uploaded) -> str:
    suffix = Path(uploaded.name).suffix.lower()
    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as tmp:
        tmp.write(uploaded.getvalue())
        tmp_path = Path(tmp.name)
    try:
        return extract_text(tmp_path).strip()
    finally:
        tmp_path.unlink(missing_ok=True)


def _reset(*keys: str) -> None:
    for k in keys:
        st.session_state.pop(k, None)


# ── Page: Job Recommender ────────────────────────────────────────────────


def page_recommender(gate: OracleGate) -> None:
    st.subheader("Job Recommender")
    st.caption("Upload your resume to get instant job recommendations")

    uploaded = st.file_uploader(
        "Resume (PDF, DOCX or TXT)", type=["pdf", "docx", "txt"], key="rec_upload",
        disabled=not gate.is_ready,
    )
    if uploaded and st.button("Find Jobs", type="primary", use_container_width=True):
        _reset("jobs", "jobs_error")
        with st.spinner("Analyzing your resume and finding job recommendations…"):
            try:
                text = _uploaded_text(uploaded)
                st.session_state["jobs"] = asyncio.run(recommend_jobs(text, gate))
            except ResumeFitError as exc:
                log.error("Job recommendation error: %s", exc)
                st.session_state["jobs_error"] = exc.message

    if st.session_state.get("jobs_error"):
        st.error(st.session_state["jobs_error"])

    jobs = st.session_state.get("jobs", [])
    if jobs:
        cols = st.columns(3)
        for i, s in enumerate(jobs):
            p = s.posting
            with cols[i % 3]:
                st.markdown(f"**{p.title}**  \n{p.company}  \n_{p.location}_")
                st.caption(f"{p.description[:200]}...")
                st.markdown(f"Match: `{s.score}` · [Apply Now]({p.apply_link})")
        if st.button("Reset", key="rec_reset"):
            _reset("jobs", "jobs_error")
            st.rerun()


# ── Page: Resume Analyzer ────────────────────────────────────────────────


def page_analyzer(gate: OracleGate) -> None:
    st.subheader("Resume Analyzer")
    st.caption("Upload your resume and get instant feedback")

    uploaded = st.file_uploader(
        "Resume (PDF, DOCX or TXT)", type=["pdf", "docx", "txt"], key="ana_upload",
        disabled=not gate.is_ready,
    )
    if uploaded and st.button("Analyze", type="primary", use_container_width=True):
        _reset("analysis", "checklist", "analysis_error")
        with st.spinner("Please wait, your resume is being analyzed…"):
            try:
                text = _uploaded_text(uploaded)
                st.session_state["checklist"] = build_presence_checklist(text)
                st.session_state["analysis"] = asyncio.run(analyze_resume(text, gate))
            except ResumeFitError as exc:
                log.error("Resume analysis error: %s", exc)
                st.session_state["analysis_error"] = exc.message
                _reset("analysis", "checklist")

    if st.session_state.get("analysis_error"):
        st.error(st.session_state["analysis_error"])

    report = st.session_state.get("analysis")
    if not report:
        return

    c1, c2 = st.columns(2)
    c1.metric("Overall Score", f"{report.overall_score}/10")
    c2.metric("Rating", score_band(report.overall_score))
    if report.summary:
        st.info(report.summary)

    s1, s2 = st.columns(2)
    with s1:
        st.markdown("**Top Strengths**")
        for item in report.strengths[:3]:
            st.markdown(f"- {item}")
    with s2:
        st.markdown("**Main Improvements**")
        for item in report.improvements[:3]:
            st.markdown(f"- {item}")

    with st.expander("Performance metrics", expanded=True):
        for key, label, _default in metric_config():
            value = report.performance_metrics.get(key, 0)
            st.progress(min(max(value / 10, 0.0), 1.0), text=f"{label}: {value:g}/10")

    with st.expander("ATS Compatibility Checklist", expanded=True):
        for item in st.session_state.get("checklist", []):
            st.markdown(f"{'✅' if item.present else '❌'}  {item.label}")

    if report.keywords:
        st.markdown("**Recommended keywords:** " + ", ".join(report.keywords))


# ── Main ─────────────────────────────────────────────────────────────────


def main() -> None:
    st.set_page_config(page_title="ResumeFit", page_icon="📄", layout="wide")
    st.title("ResumeFit")
    gate = _gate()
    if not gate.is_ready:
        st.warning("AI service is not configured. Set OPENAI_API_KEY in `.env` and restart.")

    tab_rec, tab_ana = st.tabs(["Job Recommender", "Resume Analyzer"])
    with tab_rec:
        page_recommender(gate)
    with tab_ana:
        page_analyzer(gate)


main()
