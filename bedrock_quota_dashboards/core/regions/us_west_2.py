"""Bedrock quota codes for us-west-2.

Several models that are regional in us-east-1 are reachable here only
through cross-region inference profiles.
"""

from bedrock_quota_dashboards.core.registry import QuotaCodes, model

REGION = "us-west-2"
CROSS_REGION_PREFIX = "us"

MODELS = {
    "AMAZON.NOVA_MICRO_V1": model(
        "amazon.nova-micro-v1:0", 1,
        cross_region=QuotaCodes("L-DC7FF66C", "L-3F110E0F"),
    ),
    "AMAZON.NOVA_LITE_V1": model(
        "amazon.nova-lite-v1:0", 1,
        cross_region=QuotaCodes("L-7C42E72A", "L-89F8391A"),
    ),
    "AMAZON.NOVA_PRO_V1": model(
        "amazon.nova-pro-v1:0", 1,
        cross_region=QuotaCodes("L-C0326783", "L-ED46B8C5"),
    ),
    "AMAZON.NOVA_PREMIER_V1": model(
        "amazon.nova-premier-v1:0", 1,
        cross_region=QuotaCodes("L-AA7FE948", "L-9AD981E7"),
    ),
    "AMAZON.NOVA_2_LITE_V1": model(
        "amazon.nova-2-lite-v1:0", 1,
        cross_region=QuotaCodes("L-C6F5908D", "L-F06F1187"),
        global_cross_region=QuotaCodes("L-71C69B70", "L-D5F39C2F"),
    ),
    "ANTHROPIC.CLAUDE_3_HAIKU": model(
        "anthropic.claude-3-haiku-20240307-v1:0", 1,
        regional=QuotaCodes("L-8CE99163", "L-2DC80978"),
        cross_region=QuotaCodes("L-DCADBC78", "L-616A3F5B"),
    ),
    "ANTHROPIC.CLAUDE_3_5_SONNET_20240620": model(
        "anthropic.claude-3-5-sonnet-20240620-v1:0", 1,
        regional=QuotaCodes("L-A50569E5", "L-254CACF4"),
        cross_region=QuotaCodes("L-479B647F", "L-F457545D"),
    ),
    "ANTHROPIC.CLAUDE_3_5_HAIKU": model(
        "anthropic.claude-3-5-haiku-20241022-v1:0", 1,
        regional=QuotaCodes("L-7AB4ABDD", "L-C7438F8F"),
        cross_region=QuotaCodes("L-4BF37C17", "L-252DF594"),
    ),
    "ANTHROPIC.CLAUDE_3_7_SONNET": model(
        "anthropic.claude-3-7-sonnet-20250219-v1:0", 5,
        cross_region=QuotaCodes("L-6E888CC2", "L-3D8CC480"),
    ),
    "ANTHROPIC.CLAUDE_HAIKU_4_5": model(
        "anthropic.claude-haiku-4-5-20251001-v1:0", 5,
        cross_region=QuotaCodes("L-58BE175A", "L-CCA5DF70"),
        global_cross_region=QuotaCodes("L-9A11C666", "L-E5084BBA"),
    ),
    "ANTHROPIC.CLAUDE_SONNET_4": model(
        "anthropic.claude-sonnet-4-20250514-v1:0", 5,
        cross_region=QuotaCodes("L-59759B4A", "L-559DCC33"),
        global_cross_region=QuotaCodes("L-97E41E39", "L-C63AA5DA"),
    ),
    "ANTHROPIC.CLAUDE_SONNET_4_5": model(
        "anthropic.claude-sonnet-4-5-20250929-v1:0", 5,
        cross_region=QuotaCodes("L-F4DDD3EB", "L-4A6BFAB1"),
        global_cross_region=QuotaCodes("L-27C57EE8", "L-DB84CE56"),
    ),
    "ANTHROPIC.CLAUDE_OPUS_4": model(
        "anthropic.claude-opus-4-20250514-v1:0", 5,
        cross_region=QuotaCodes("L-29C2B0A3", "L-C99C7EF6"),
    ),
    "ANTHROPIC.CLAUDE_OPUS_4_1": model(
        "anthropic.claude-opus-4-1-20250805-v1:0", 5,
        cross_region=QuotaCodes("L-BD85BFCD", "L-7EC72A47"),
    ),
    "ANTHROPIC.CLAUDE_OPUS_4_5": model(
        "anthropic.claude-opus-4-5-20251101-v1:0", 5,
        cross_region=QuotaCodes("L-7007E9C9", "L-27989F42"),
        global_cross_region=QuotaCodes("L-3ABF6ACC", "L-58424D95"),
    ),
}
