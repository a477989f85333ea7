"""
Shared fixtures for the test suite.
"""

import pytest

from bedrock_quota_dashboards.core.registry import QuotaCodes, QuotaRegistry, model


@pytest.fixture
def fixture_registry():
    """Small registry covering every endpoint kind and a partial code pair."""
    return QuotaRegistry(
        region="us-east-1",
        models={
            "AMAZON.NOVA_LITE_V1": model(
                "amazon.nova-lite-v1:0", 1,
                regional=QuotaCodes("L-REG-TOK", "L-REG-REQ"),
                cross_region=QuotaCodes("L-CR-TOK", "L-CR-REQ"),
            ),
            "AMAZON.NOVA_CANVAS_V1": model(
                "amazon.nova-canvas-v1:0", 1,
                regional=QuotaCodes(request_quota_code="L-CANVAS-REQ"),
            ),
            "ANTHROPIC.CLAUDE_SONNET_4_5": model(
                "anthropic.claude-sonnet-4-5-20250929-v1:0", 5,
                cross_region=QuotaCodes("L-SON-TOK", "L-SON-REQ"),
                global_cross_region=QuotaCodes("L-SON-GTOK", "L-SON-GREQ"),
            ),
        },
    )
