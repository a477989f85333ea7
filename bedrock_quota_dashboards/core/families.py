"""
Model family classification for dashboard banners.

Rules are checked in order and the first match wins. Add a rule to
support a new provider.
"""

from dataclasses import dataclass
from typing import Callable, Sequence


OTHER_FAMILY = "Other Models"


@dataclass(frozen=True)
class FamilyRule:
    """A predicate over the model id and the banner label it maps to."""
    matches: Callable[[str], bool]
    label: str


def prefix_rule(prefix: str, label: str) -> FamilyRule:
    return FamilyRule(matches=lambda model_id: model_id.startswith(prefix), label=label)


DEFAULT_FAMILY_RULES = (
    prefix_rule("amazon.nova-", "Amazon Nova"),
    prefix_rule("amazon.titan-", "Amazon Titan"),
    prefix_rule("anthropic.claude", "Anthropic Claude"),
    prefix_rule("meta", "Meta"),
    prefix_rule("mistral.", "Mistral AI"),
    prefix_rule("cohere.", "Cohere"),
    prefix_rule("ai21.", "AI21 Labs"),
    prefix_rule("deepseek.", "DeepSeek"),
    prefix_rule("google.", "Google"),
    prefix_rule("nvidia.", "NVIDIA"),
    prefix_rule("openai.", "OpenAI"),
    prefix_rule("qwen.", "Qwen"),
    prefix_rule("moonshot.", "Kimi"),
    prefix_rule("kimi.", "Kimi"),
    prefix_rule("minimax.", "Minimax"),
    prefix_rule("magistral.", "Magistral"),
)


def classify_model_family(
    model_id: str,
    rules: Sequence[FamilyRule] = DEFAULT_FAMILY_RULES,
) -> str:
    """Return the family label of a model id, or "Other Models"."""
    for rule in rules:
        if rule.matches(model_id):
            return rule.label
    return OTHER_FAMILY
