"""Prompts for proposal generation."""

from datetime import date
from typing import Optional

from proposal_maker.models import (
    ProposalTheme,
    EXECUTIVE_SUMMARY_HEADING,
    INVESTMENT_HEADING,
    TIMELINE_HEADING,
)

PROPOSAL_SYSTEM_ROLE = (
    "You are an expert business proposal writer and analyst with 20 years of experience."
)

PROPOSAL_PROMPT = """{role} Your primary goal is to generate an exceptionally detailed, comprehensive, and lengthy business proposal.
Your task is a multi-step process based **only** on the unstructured text provided.
1.  **Analyze & Extract**: Read the UNSTRUCTURED PROJECT DETAILS carefully. From this text, identify and extract the project's title and the client's company name.
2.  **Determine Theme**: Based on the content and tone of the text, determine the most appropriate theme for the proposal. You MUST choose one of these options: {theme_options}.
3.  **Generate**: Use the extracted information and chosen theme to generate a comprehensive business proposal as a single JSON object.

**UNSTRUCTURED PROJECT DETAILS:**
---
{notes}
---

**THEME & TONE GUIDELINES (Use these to make the theme choice):**
- **'CORPORATE_FORMAL'**: For law, finance, government, traditional business. Tone: Solemn, serious, reserved, authoritative.
- **'TECH_MODERN'**: For software, AI, IT services, startups. Tone: Innovative, forward-thinking, efficient, clear.
- **'CREATIVE_VIBRANT'**: For design, marketing, media, video production. Tone: Energetic, bold, engaging, confident.
- **'ACADEMIC_CLASSIC'**: For training, education, research, non-profits. Tone: Scholarly, knowledgeable, trustworthy, formal.

**CRITICAL INSTRUCTIONS - ADHERE TO THESE STRICTLY:**
1.  **LENGTH & DETAIL**: Every section must be fully developed with extensive detail. Aim for a total of 8-12 sections.
2.  **CLIENT & PROJECT DETAILS**:
    - Use "{today}" as the proposal date.
    - If a specific contact person is mentioned in the unstructured details, extract it for the 'preparedFor' field.
3.  **BRANDING ELEMENTS**:
    - Create a short, professional 'projectTagline' that summarizes the project's purpose, matching the theme's tone.
    - Create a 'companyLogoText' placeholder, a short, stylized version of the client's company name (e.g., "ACME CORP").
4.  **TONE & LANGUAGE**: Maintain the tone of the chosen theme. Use ONLY impersonal, third-person language. DO NOT use personal pronouns like "I", "we", "you" or "your". Refer to the client by company name.
5.  **CONTENT RESTRICTIONS**: NO marketing language, sales pitches, buzzwords, ROI calculations, exclamation marks, or "Next Steps" sections. Do not mention specific technologies or team members unless explicitly provided in the input.
6.  **HTML FORMATTING**: Every 'content' field MUST be a valid HTML string, e.g. "<p>First paragraph.</p><p>Second paragraph.</p>". Do not use markdown or newlines.
7.  **DYNAMIC SECTION GENERATION**:
    - Create the sections most logical for THIS proposal, e.g. "Introduction", "Understanding the Current State", "Project Objectives", "Proposed Solution", "Scope of Work", "Methodology", "Key Deliverables", "Project Governance", "Assumptions and Dependencies".
    - Standard text sections contain only 'heading' and a detailed 'content' HTML string of several paragraphs (at least 300-400 words).
    - **Use the exact object structure for recognized section types**:
      - The section with heading "{executive_summary}" MUST include a 'pullQuote' string and a 'content' summary of at least 3-4 paragraphs.
      - The section with heading "{investment}" MUST have an 'items' array of {{item, description, cost}} with at least 3-5 detailed line items.
      - The section with heading "{timeline}" MUST have an 'items' array of {{phase, description, duration}} with at least 4-5 phases.
      - **VISUAL MOCKUPS**: If the project involves a visual component (software application, website, mobile app, dashboard, report layout), include **between 2 and 4** mockup sections with headings like "Solution Preview", "Dashboard Mockup", "Key Feature Spotlight" or "Mobile Interface".
      - Each mockup section MUST contain 'heading', a 'content' HTML string of 1-2 paragraphs explaining the mockup, and a 'mockupImagePrompt'.
      - All 'mockupImagePrompt' values MUST describe different views of the **same, consistent application or deliverable**, visually and stylistically coherent, and highly detailed.
8.  **OUTPUT FORMAT**: The entire response MUST be a single, valid JSON object matching the structure below. No extra text or explanations.

```json
{{
  "title": "[Extracted Project Title]",
  "client": {{
    "companyName": "[Extracted Client Company]",
    "preparedFor": "[Extracted Contact Person, or null if not found]"
  }},
  "date": "{today}",
  "branding": {{
    "companyLogoText": "[Short, stylized client name for logo]",
    "projectTagline": "[Short project tagline]"
  }},
  "theme": "[Chosen theme]",
  "sections": [
    {{
      "heading": "{executive_summary}",
      "pullQuote": "A single, impactful sentence summarizing the core benefit.",
      "content": "<p>A detailed, formal summary of the entire proposal.</p>"
    }},
    {{
      "heading": "Scope of Work",
      "content": "<p>A very detailed section outlining tasks, boundaries, and deliverables.</p>"
    }},
    {{
      "heading": "{investment}",
      "items": [
        {{ "item": "Phase 1: Discovery & Planning", "description": "Complete discovery, research, and strategic planning.", "cost": "$7,500" }}
      ]
    }}
  ]
}}
```

Now analyze the unstructured text, extract the required information, determine the theme, and generate the complete proposal as a valid JSON object."""


def build_proposal_prompt(notes: str, today: Optional[date] = None) -> str:
    """
    메모를 포함한 제안서 생성 프롬프트를 만듭니다.

    Args:
        notes: 사용자가 입력한 자유 형식 프로젝트 메모
        today: 제안서 작성일 (기본값: 오늘)

    Returns:
        생성 모델에 보낼 단일 프롬프트 문자열
    """
    today = today or date.today()
    theme_options = ", ".join(f"'{theme.value}'" for theme in ProposalTheme)

    return PROPOSAL_PROMPT.format(
        role=PROPOSAL_SYSTEM_ROLE,
        theme_options=theme_options,
        notes=notes.strip(),
        today=f"{today.strftime('%B')} {today.day}, {today.year}",
        executive_summary=EXECUTIVE_SUMMARY_HEADING,
        investment=INVESTMENT_HEADING,
        timeline=TIMELINE_HEADING,
    )

