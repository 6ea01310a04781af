"""
Purpose: API cost estimates for the sidebar usage panel.
Has nothing to do with pizza prices; those only exist in the system prompt.
"""

from typing import Optional

from ..models import Price, UsageStats

# USD per 1M tokens (input, output)
PRICE_TABLE = {
    "gpt-4o-mini": Price(0.15, 0.60),
    "gpt-4o": Price(2.50, 10.00),
    "gpt-4.1-mini": Price(0.40, 1.60),
    "gpt-5-mini": Price(0.25, 2.00),
}
CHAT_MODELS = list(PRICE_TABLE)


def estimate_cost(model: str, tokens_in: int, tokens_out: int) -> float:
    p = PRICE_TABLE.get(model)
    if p is None:
        return 0.0
    return (tokens_in * p.input_per_1M + tokens_out * p.output_per_1M) / 1_000_000


def session_cost(usage: UsageStats, default_model: Optional[str] = None) -> float:
    """Cost of everything streamed so far in this session."""
    model = usage.model_used or default_model or ""
    return estimate_cost(model, usage.tokens_in, usage.tokens_out)
