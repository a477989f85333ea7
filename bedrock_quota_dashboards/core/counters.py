"""
Usage counters for quota estimation.

One bucket's worth of raw counters for a single model identity.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class UsageCounters:
    """Counters for one model identity over one time bucket.

    The first four are emitted by Bedrock. requested_max_output is
    published by instrumented callers and is None when no caller
    reported it for the bucket.
    """
    input_tokens: float = 0
    cache_write_tokens: float = 0
    output_tokens: float = 0
    invocations: float = 0
    requested_max_output: Optional[float] = None

    def __post_init__(self):
        """Validate counters are non-negative."""
        for name in ("input_tokens", "cache_write_tokens", "output_tokens", "invocations"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")
        if self.requested_max_output is not None and self.requested_max_output < 0:
            raise ValueError("requested_max_output cannot be negative")

    @property
    def prompt_tokens(self) -> float:
        """Tokens charged up front: input plus cache writes."""
        return self.input_tokens + self.cache_write_tokens
