"""AI resume review: overall score, strengths, improvements and metrics."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from resumefit.checklist import build_presence_checklist
from resumefit.config import analysis_model, checklist_path, load_checklist_config
from resumefit.errors import MalformedOracleResponse, OracleReportedError
from resumefit.log import get_logger
from resumefit.models import AnalysisReport, ChatMessage, PresenceChecklistItem
from resumefit.oracle import OracleSource, ensure_oracle, reply_text
from resumefit.parsing import parse_json_object
from resumefit.resume_parser import extract_text_async

log = get_logger(__name__)

DEFAULT_ACTION_ITEMS: list[str] = [
    "Optimize keyword placement for better ATS scoring",
    "Enhance content with quantifiable achievements",
    "Consider industry-specific terminology",
]

DEFAULT_PRO_TIPS: list[str] = [
    "Use action verbs to start bullet points",
    "Keep descriptions concise and impactful",
    "Tailor keywords to specific job descriptions",
]

_ANALYZE_PROMPT = """\
Review the resume below as an experienced recruiter and ATS specialist.

Return ONLY a JSON object with these exact keys:
{{
  "overallScore": "score from 1 to 10",
  "strengths": ["strength 1", "strength 2", "strength 3"],
  "improvements": ["improvement 1", "improvement 2", "improvement 3"],
  "keywords": ["keyword the resume should include"],
  "summary": "2-3 sentence executive summary",
  "performanceMetrics": {{
    "formatting": 0,
    "contentQuality": 0,
    "keywordUsage": 0,
    "atsCompatibility": 0,
    "quantifiableAchievements": 0
  }},
  "actionItems": ["concrete next step"],
  "proTips": ["short tip"],
  "atsChecklist": ["ATS check the resume passes or fails"]
}}
Every metric is a number from 0 to 10.

If the document is not a resume, return ONLY:
{{"error": "This document does not appear to be a resume."}}

Resume text:
\"\"\"{document}\"\"\"
"""


@lru_cache(maxsize=4)
def _metric_defaults_from(path: Path) -> tuple[tuple[str, str, float], ...]:
    metrics = load_checklist_config(path)["metrics"]
    return tuple((m["key"], m.get("label", m["key"]), float(m.get("default", 0))) for m in metrics)


def metric_config() -> tuple[tuple[str, str, float], ...]:
    """(key, label, default) for each performance metric, in display order."""
    return _metric_defaults_from(checklist_path())


def score_band(overall_score: str) -> str:
    try:
        value = float(str(overall_score).split("/")[0].strip())
    except ValueError:
        return "Needs improvement"
    if value >= 8:
        return "Excellent"
    if value >= 6:
        return "Good"
    return "Needs improvement"


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None and str(v).strip()]


def _metrics(raw: Any) -> dict[str, float]:
    raw = raw if isinstance(raw, dict) else {}
    out: dict[str, float] = {}
    for key, _label, default in metric_config():
        value = raw.get(key)
        try:
            out[key] = float(value) if value is not None else default
        except (TypeError, ValueError):
            out[key] = default
    return out


def parse_analysis_reply(reply: str) -> AnalysisReport:
    data = parse_json_object(reply)
    if data is None:
        raise MalformedOracleResponse("Failed to parse AI response: no JSON object found")
    if data.get("error"):
        raise OracleReportedError(str(data["error"]))
    if not data.get("overallScore"):
        raise MalformedOracleResponse("Failed to parse AI response: Invalid AI response")

    return AnalysisReport(
        overall_score=str(data["overallScore"]),
        strengths=_str_list(data.get("strengths")),
        improvements=_str_list(data.get("improvements")),
        keywords=_str_list(data.get("keywords")),
        summary=str(data.get("summary") or ""),
        performance_metrics=_metrics(data.get("performanceMetrics")),
        action_items=_str_list(data.get("actionItems")) or list(DEFAULT_ACTION_ITEMS),
        pro_tips=_str_list(data.get("proTips")) or list(DEFAULT_PRO_TIPS),
        ats_checklist=_str_list(data.get("atsChecklist")),
    )


async def analyze_resume(text: str, oracle: OracleSource) -> AnalysisReport:
    chat = ensure_oracle(oracle)
    reply = await chat.chat(
        [
            ChatMessage(role="system", content="You are an expert resume reviewer."),
            ChatMessage(role="user", content=_ANALYZE_PROMPT.format(document=text)),
        ],
        model=analysis_model(),
    )
    report = parse_analysis_reply(reply_text(reply))
    log.info("Resume analysis complete: score %s (%s)", report.overall_score, score_band(report.overall_score))
    return report


async def analyze_file(
    path: Path, oracle: OracleSource
) -> tuple[AnalysisReport, list[PresenceChecklistItem]]:
    text = await extract_text_async(path)
    checklist = build_presence_checklist(text)
    report = await analyze_resume(text, oracle)
    return report, checklist
