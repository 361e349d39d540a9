"""Render recommendations and resume analysis as Markdown."""
from __future__ import annotations

from datetime import datetime, timezone

from resumefit.analyzer import metric_config, score_band
from resumefit.log import get_logger
from resumefit.models import AnalysisReport, PresenceChecklistItem, ScoredJobPosting

log = get_logger(__name__)

SNIPPET_CHARS = 200


def _short_url_label(url: str) -> str:
    try:
        from urllib.parse import urlparse

        host = urlparse(url).hostname or ""
        host = host.replace("www.", "")
        parts = host.split(".")
        return parts[0].capitalize() if parts and parts[0] else "Link"
    except ValueError:
        return "Link"


def build_recommendation_report(scored: list[ScoredJobPosting], limit: int = 15) -> str:
    date = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    lines: list[str] = [f"# Job Recommendations — {date}", ""]
    lines.append(f"**{len(scored)}** postings ranked by overlap with your resume")
    lines.append("")

    top = scored[:limit]
    for i, s in enumerate(top, 1):
        p = s.posting
        lines.append(f"### {i}. {p.title} @ {p.company}")
        lines.append(f"- **Score:** {s.score}")
        lines.append(f"- **Location:** {p.location}")
        lines.append(f"- {p.description[:SNIPPET_CHARS]}...")
        if p.apply_link and p.apply_link != "#":
            lines.append(f"- **Apply:** [{_short_url_label(p.apply_link)}]({p.apply_link})")
        lines.append("")

    if top:
        lines.append("---")
        lines.append("")
        lines.append("| # | Role | Company | Location | Score |")
        lines.append("|--:|------|---------|----------|------:|")
        for i, s in enumerate(top, 1):
            p = s.posting
            title = p.title[:40] + ("…" if len(p.title) > 40 else "")
            company = p.company[:22] + ("…" if len(p.company) > 22 else "")
            lines.append(f"| {i} | {title} | {company} | {p.location[:18]} | {s.score} |")
        lines.append("")

    log.debug("Built recommendation report for %d postings", len(top))
    return "\n".join(lines)


def build_analysis_report(
    report: AnalysisReport, checklist: list[PresenceChecklistItem]
) -> str:
    lines: list[str] = ["# Resume Analysis", ""]
    lines.append(f"**Overall score:** {report.overall_score}/10 — {score_band(report.overall_score)}")
    lines.append("")
    if report.summary:
        lines.append("## Executive summary")
        lines.append("")
        lines.append(report.summary)
        lines.append("")

    sections = (
        ("Top strengths", report.strengths[:3]),
        ("Main improvements", report.improvements[:3]),
        ("Action items", report.action_items),
        ("Pro tips", report.pro_tips),
    )
    for title, items in sections:
        if not items:
            continue
        lines.append(f"## {title}")
        lines.append("")
        lines.extend(f"- {item}" for item in items)
        lines.append("")

    lines.append("## Performance metrics")
    lines.append("")
    for key, label, _default in metric_config():
        lines.append(f"- **{label}:** {report.performance_metrics.get(key, 0):g}/10")
    lines.append("")

    if checklist:
        lines.append("## ATS compatibility checklist")
        lines.append("")
        for item in checklist:
            lines.append(f"- {'✅' if item.present else '❌'} {item.label}")
        lines.append("")

    if report.keywords:
        lines.append("## Recommended keywords")
        lines.append("")
        lines.append(", ".join(report.keywords))
        lines.append("")

    return "\n".join(lines)
