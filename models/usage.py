"""Token usage and cost accounting for model calls."""
from typing import Dict, Optional
from pydantic import BaseModel, Field


DEFAULT_MODEL = "gpt-5-mini"

# USD per 1M tokens
MODEL_PRICING: Dict[str, Dict[str, float]] = {
    "gpt-5.1": {"input": 1.50, "output": 10.00},
    "gpt-5": {"input": 2.50, "output": 10.00},
    "gpt-5-mini": {"input": 0.10, "output": 0.40},
    "gpt-5-nano": {"input": 0.05, "output": 0.20},
}


def get_pricing(model: str) -> Dict[str, float]:
    """Pricing for a model; unknown models are priced as the default model."""
    return MODEL_PRICING.get(model, MODEL_PRICING[DEFAULT_MODEL])


class Usage(BaseModel):
    """Token counts and estimated cost of one model call."""
    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)
    total_tokens: int = Field(default=0, ge=0)
    input_cost: float = Field(default=0.0, ge=0)
    output_cost: float = Field(default=0.0, ge=0)
    total_cost: float = Field(default=0.0, ge=0)

    @classmethod
    def from_tokens(
        cls,
        model: str,
        prompt_tokens: Optional[int],
        completion_tokens: Optional[int],
    ) -> "Usage":
        """Build usage for a call, pricing it with :data:`MODEL_PRICING`."""
        prompt_tokens = prompt_tokens or 0
        completion_tokens = completion_tokens or 0
        pricing = get_pricing(model)
        input_cost = (prompt_tokens / 1_000_000) * pricing["input"]
        output_cost = (completion_tokens / 1_000_000) * pricing["output"]
        return cls(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
            input_cost=input_cost,
            output_cost=output_cost,
            total_cost=input_cost + output_cost,
        )
