"""AI summary of a month via the Gemini REST API."""

import json
import os
from typing import Optional

import requests

from famfin.domain.periods import Period
from famfin.domain.report import PeriodSummary
from famfin.store.codec import expense_to_dict

API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash"


def build_summary_prompt(period: Period, summary: PeriodSummary) -> str:
    """Build the analysis prompt for one Period.

    Args:
        period: Period being analyzed.
        summary: Precomputed totals for the Period.

    Returns:
        Prompt text.
    """
    categories = "\n".join(
        f"- {status.category.value}: spent {status.spent:.2f} of {status.budget:.2f}" for status in summary.categories
    )
    expenses = json.dumps([expense_to_dict(e) for e in period.expenses], indent=2)

    return (
        "You are a personal finance advisor. Analyze this household's month.\n\n"
        f"Month: {period.key.label}\n"
        f"Total income: {summary.total_income:.2f}\n"
        f"Total expenses: {summary.total_expenses:.2f}\n"
        f"Balance: {summary.balance:.2f}\n\n"
        f"Income breakdown:\n{json.dumps(period.income, indent=2)}\n\n"
        f"Budget (50/30/20) versus spending:\n{categories}\n\n"
        f"Expenses:\n{expenses}\n\n"
        "Give a one-paragraph overview, a short assessment of the 50/30/20 split, "
        "and three practical tips for next month. Answer in plain text."
    )


def request_summary(api_key: str, prompt: str, model: str = DEFAULT_MODEL) -> str:
    """Ask Gemini for a summary.

    Args:
        api_key: Gemini API key.
        prompt: Prompt text.
        model: Model name.

    Returns:
        Generated text, joined across response parts.

    Raises:
        requests.RequestException: If API request fails.
        ValueError: If the response carries no text.
    """
    headers = {
        "x-goog-api-key": api_key,
        "Content-Type": "application/json",
    }
    body = {"contents": [{"parts": [{"text": prompt}]}]}

    response = requests.post(f"{API_BASE_URL}/models/{model}:generateContent", headers=headers, json=body, timeout=60)
    response.raise_for_status()

    candidates = response.json().get("candidates", [])
    if not candidates:
        raise ValueError("Gemini returned no candidates")

    parts = candidates[0].get("content", {}).get("parts", [])
    text = "".join(part.get("text", "") for part in parts)
    if not text:
        raise ValueError("Gemini returned an empty summary")
    return text


def get_api_key() -> Optional[str]:
    """Get Gemini API key from environment.

    Returns:
        Key string or None if not set.
    """
    return os.environ.get("GEMINI_API_KEY")
