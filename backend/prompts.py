from datetime import date, datetime
from typing import Union

from config.constants import PROMPT_CONFIG
from models.verdicts import Verdict

FACT_CHECK_PROMPT = """
Current date: {current_date}
You are a highly advanced AI fact-checker named {assistant_name}.
Your task is to analyze the following claim and determine its veracity using live web evidence when available.

Claim: "{claim}"

Important requirements:
- Use web search tools to find recent, authoritative sources where possible. Prefer sources published within the last {recency_months} months when relevant.
- Always include the publication date for each source you cite.
- Critically evaluate evidence for credibility, corroboration, and bias.
- Formulate a step-by-step reasoning process that explains how you arrived at your conclusion.
- Assign a final verdict using one of these exact strings: {verdicts}.
- Write a concise, one-to-two sentence summary of your findings.

Your final response MUST be a single, valid JSON object (no surrounding text or markdown) with this exact structure:
{{
  "verdict": "YOUR_VERDICT_HERE",
  "summary": "Your concise summary here.",
  "reasoning": "Your detailed, step-by-step reasoning here. Use newline characters (\\n) for paragraphs.",
  "sources": [{{ "uri": "https://...", "title": "...", "published": "YYYY-MM-DD" }}]
}}

If the claim cannot be verified with reliable sources, return "UNVERIFIABLE" and explain which checks you performed.
"""


def _iso_date(current_date: Union[date, datetime, str]) -> str:
    if isinstance(current_date, datetime):
        return current_date.date().isoformat()
    if isinstance(current_date, date):
        return current_date.isoformat()
    return date.fromisoformat(current_date).isoformat()


def build_fact_check_prompt(claim: str, current_date: Union[date, datetime, str]) -> str:
    """
    Build the instruction text sent to the model for a single claim.
    Args:
        claim: The user's claim, embedded verbatim
        current_date: Today's date, rendered as YYYY-MM-DD
    Returns:
        The prompt string
    """
    verdicts = ", ".join(f"'{v.value}'" for v in Verdict)
    return FACT_CHECK_PROMPT.format(
        current_date=_iso_date(current_date),
        assistant_name=PROMPT_CONFIG.ASSISTANT_NAME,
        claim=claim,
        recency_months=PROMPT_CONFIG.RECENCY_MONTHS,
        verdicts=verdicts,
    )
