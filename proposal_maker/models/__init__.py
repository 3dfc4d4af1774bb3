"""Data models for the proposal maker."""

from .proposal import (
    EXECUTIVE_SUMMARY_HEADING,
    INVESTMENT_HEADING,
    TIMELINE_HEADING,
    ProposalTheme,
    ClientInfo,
    Branding,
    InvestmentLineItem,
    TimelineMilestone,
    TextSection,
    ExecutiveSummarySection,
    InvestmentSection,
    TimelineSection,
    MockupSection,
    Section,
    ProposalDocument,
    classify_section,
    coerce_theme,
    default_theme,
)
from .processing import GenerationStatus, GenerationStage, ProgressEvent
from .error import ErrorResponse

__all__ = [
    # Proposal models
    "EXECUTIVE_SUMMARY_HEADING",
    "INVESTMENT_HEADING",
    "TIMELINE_HEADING",
    "ProposalTheme",
    "ClientInfo",
    "Branding",
    "InvestmentLineItem",
    "TimelineMilestone",
    "TextSection",
    "ExecutiveSummarySection",
    "InvestmentSection",
    "TimelineSection",
    "MockupSection",
    "Section",
    "ProposalDocument",
    "classify_section",
    "coerce_theme",
    "default_theme",
    # Processing models
    "GenerationStatus",
    "GenerationStage",
    "ProgressEvent",
    # Error models
    "ErrorResponse",
]
