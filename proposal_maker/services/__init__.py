"""Services for the proposal maker."""

from .gemini_client import GeminiClient, get_gemini_client
from .orchestrator import ProposalOrchestrator, get_orchestrator
from .session import ProposalSession, get_proposal_session

__all__ = [
    "GeminiClient",
    "get_gemini_client",
    "ProposalOrchestrator",
    "get_orchestrator",
    "ProposalSession",
    "get_proposal_session",
]
