"""Failure kinds surfaced by the scoring engine.

Every error is terminal for the request that raised it. The message is meant
to be shown to the user as-is.
"""
from __future__ import annotations


class ResumeFitError(Exception):
    default_message = "An unexpected error occurred. Please try again."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InputTooShort(ResumeFitError):
    default_message = (
        "Resume text is too short or empty. "
        "Please ensure your resume has sufficient content."
    )


class OracleNotReady(ResumeFitError):
    default_message = "AI service is not ready. Please wait a moment and try again."


class OracleTimeout(ResumeFitError):
    default_message = "The AI service took too long to respond. Please try again."


class MalformedOracleResponse(ResumeFitError):
    default_message = "No valid keyword array found in AI response. Please try again."


class EmptyOrInvalidKeywords(ResumeFitError):
    default_message = "Invalid keyword extraction result. Please try again."


class OracleReportedError(ResumeFitError):
    """The oracle answered with an explicit ``{"error": ...}`` payload."""


class JobSearchUnavailable(ResumeFitError):
    default_message = "Job search API key is not configured. Please contact support."


class NoJobsFound(ResumeFitError):
    default_message = (
        "No jobs found matching your resume. Try updating your resume "
        "with more relevant skills or experience."
    )


class NotAResume(ResumeFitError):
    default_message = (
        "This document does not appear to be a resume. Please upload a proper "
        "resume containing professional experience, education, and skills sections."
    )


class UnsupportedDocument(ResumeFitError):
    default_message = "Unsupported resume format."


class ConfigError(ResumeFitError):
    default_message = "Invalid configuration."
