from .proposal_prompts import (
    PROPOSAL_PROMPT,
    build_proposal_prompt,
)

__all__ = [
    "PROPOSAL_PROMPT",
    "build_proposal_prompt",
]
