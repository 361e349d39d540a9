"""Data models for postings, checklist items, oracle traffic and reports."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union


@dataclass(frozen=True)
class JobPosting:
    title: str
    company: str
    location: str
    description: str
    apply_link: str


@dataclass
class ScoredJobPosting:
    posting: JobPosting
    score: int


@dataclass
class PresenceChecklistItem:
    label: str
    present: bool


@dataclass(frozen=True)
class ChatMessage:
    role: Literal["system", "user"]
    content: str

    def as_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class TextReply:
    text: str


@dataclass(frozen=True)
class ReplyMessage:
    content: str | None = None


@dataclass(frozen=True)
class StructuredReply:
    message: ReplyMessage = field(default_factory=ReplyMessage)


OracleReply = Union[TextReply, StructuredReply]


@dataclass
class ResumeValidation:
    is_resume: bool
    reason: str = ""


@dataclass
class AnalysisReport:
    overall_score: str
    strengths: list[str]
    improvements: list[str]
    keywords: list[str]
    summary: str
    performance_metrics: dict[str, float]
    action_items: list[str]
    pro_tips: list[str]
    ats_checklist: list[str]
