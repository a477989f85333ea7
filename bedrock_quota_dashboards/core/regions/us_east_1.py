"""Bedrock quota codes for us-east-1."""

from bedrock_quota_dashboards.core.registry import QuotaCodes, model

REGION = "us-east-1"
CROSS_REGION_PREFIX = "us"

MODELS = {
    "AMAZON.NOVA_MICRO_V1": model(
        "amazon.nova-micro-v1:0", 1,
        regional=QuotaCodes("L-CFA4FA0D", "L-E118F160"),
        cross_region=QuotaCodes("L-DC7FF66C", "L-3F110E0F"),
    ),
    "AMAZON.NOVA_LITE_V1": model(
        "amazon.nova-lite-v1:0", 1,
        regional=QuotaCodes("L-70423BF8", "L-E386A278"),
        cross_region=QuotaCodes("L-7C42E72A", "L-89F8391A"),
    ),
    "AMAZON.NOVA_PRO_V1": model(
        "amazon.nova-pro-v1:0", 1,
        regional=QuotaCodes("L-CE33604C", "L-F2717A44"),
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
    "AMAZON.NOVA_CANVAS_V1": model(
        "amazon.nova-canvas-v1:0", 1,
        regional=QuotaCodes(request_quota_code="L-3F26CE29"),
    ),
    "ANTHROPIC.CLAUDE_3_HAIKU": model(
        "anthropic.claude-3-haiku-20240307-v1:0", 1,
        regional=QuotaCodes("L-8CE99163", "L-2DC80978"),
        cross_region=QuotaCodes("L-DCADBC78", "L-616A3F5B"),
    ),
    "ANTHROPIC.CLAUDE_3_SONNET": model(
        "anthropic.claude-3-sonnet-20240229-v1:0", 1,
        regional=QuotaCodes("L-4C35BB2A", "L-F406804E"),
        cross_region=QuotaCodes("L-5DF13F64", "L-46591118"),
    ),
    "ANTHROPIC.CLAUDE_3_OPUS": model(
        "anthropic.claude-3-opus-20240229-v1:0", 1,
        regional=QuotaCodes("L-27477D78", "L-8050DFC8"),
        cross_region=QuotaCodes("L-6C86825E", "L-EB15245D"),
    ),
    "ANTHROPIC.CLAUDE_3_5_SONNET_20240620": model(
        "anthropic.claude-3-5-sonnet-20240620-v1:0", 1,
        regional=QuotaCodes("L-A50569E5", "L-254CACF4"),
        cross_region=QuotaCodes("L-479B647F", "L-F457545D"),
    ),
    "ANTHROPIC.CLAUDE_3_5_SONNET_20241022": model(
        "anthropic.claude-3-5-sonnet-20241022-v2:0", 1,
        regional=QuotaCodes("L-AD41C330", "L-79E773B3"),
        cross_region=QuotaCodes("L-FF8B4E28", "L-1D3E59A3"),
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
    "ANTHROPIC.CLAUDE_SONNET_4_6": model(
        "anthropic.claude-sonnet-4-6", 5,
        cross_region=QuotaCodes("L-15B8E632", "L-00FF3314"),
        global_cross_region=QuotaCodes("L-7BEE40FB", "L-F6E116D7"),
    ),
    "ANTHROPIC.CLAUDE_SONNET_4_6_1M": model(
        "anthropic.claude-sonnet-4-6", 5,
        cross_region=QuotaCodes("L-CE512C9A", "L-47DE5258"),
        global_cross_region=QuotaCodes("L-6955C77B", "L-B117CDDA"),
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
    "ANTHROPIC.CLAUDE_OPUS_4_6": model(
        "anthropic.claude-opus-4-6-v1", 5,
        cross_region=QuotaCodes("L-0AD9BBE8", "L-11DFF789"),
        global_cross_region=QuotaCodes("L-3DCCFAA4", "L-3DD46812"),
    ),
    "ANTHROPIC.CLAUDE_OPUS_4_6_1M": model(
        "anthropic.claude-opus-4-6-v1", 5,
        cross_region=QuotaCodes("L-7DBBE6A1", "L-410BCACA"),
        global_cross_region=QuotaCodes("L-4C59C1F4", "L-CDA5906C"),
    ),
    "META.LLAMA3_8B_INSTRUCT": model(
        "meta.llama3-8b-instruct-v1:0", 1,
        regional=QuotaCodes("L-03A9B835", "L-320BEFEB"),
    ),
    "META.LLAMA3_70B_INSTRUCT": model(
        "meta.llama3-70b-instruct-v1:0", 1,
        regional=QuotaCodes("L-609E24B0", "L-46D383AF"),
    ),
    "META.LLAMA3_2_1B_INSTRUCT": model(
        "meta.llama3-2-1b-instruct-v1:0", 1,
        regional=QuotaCodes("L-6F14193C", "L-20CFCD61"),
        cross_region=QuotaCodes("L-BD9FDA6F", "L-A31D2B40"),
    ),
    "META.LLAMA3_2_3B_INSTRUCT": model(
        "meta.llama3-2-3b-instruct-v1:0", 1,
        regional=QuotaCodes("L-A7EDC29B", "L-2F9B4FC2"),
        cross_region=QuotaCodes("L-0B2687F4", "L-6B0A9FAD"),
    ),
    "META.LLAMA3_2_11B_INSTRUCT": model(
        "meta.llama3-2-11b-instruct-v1:0", 1,
        regional=QuotaCodes("L-E2D0B19E", "L-53CCF898"),
    ),
    "META.LLAMA3_2_90B_INSTRUCT": model(
        "meta.llama3-2-90b-instruct-v1:0", 1,
        regional=QuotaCodes("L-41C63FF8", "L-EBDED838"),
    ),
    "META.LLAMA3_1_8B_INSTRUCT": model(
        "meta.llama3-1-8b-instruct-v1:0", 1,
        regional=QuotaCodes("L-9E79C230", "L-19A2ED6C"),
        cross_region=QuotaCodes("L-9782749C", "L-396C5302"),
    ),
    "META.LLAMA3_1_70B_INSTRUCT": model(
        "meta.llama3-1-70b-instruct-v1:0", 1,
        regional=QuotaCodes("L-48E55E59", "L-ECA5B974"),
        cross_region=QuotaCodes("L-92E68994", "L-29644EB3"),
    ),
    "META.LLAMA3_3_70B_INSTRUCT": model(
        "meta.llama3-3-70b-instruct-v1:0", 1,
        cross_region=QuotaCodes("L-0E7AA8B7", "L-DEDE703C"),
    ),
    "META.LLAMA4_SCOUT_17B_INSTRUCT": model(
        "meta.llama4-scout-17b-instruct-v1:0", 1,
        cross_region=QuotaCodes("L-532E6630", "L-751B753A"),
    ),
    "META.LLAMA4_MAVERICK_17B_INSTRUCT": model(
        "meta.llama4-maverick-17b-instruct-v1:0", 1,
        cross_region=QuotaCodes("L-DE3FBBF4", "L-4F18EF2F"),
    ),
    "MISTRAL.MISTRAL_7B_INSTRUCT": model(
        "mistral.mistral-7b-instruct-v0:2", 1,
        regional=QuotaCodes("L-02D831F1", "L-D9A35062"),
    ),
    "MISTRAL.MISTRAL_SMALL_2402": model(
        "mistral.mistral-small-2402-v1:0", 1,
        regional=QuotaCodes("L-82C15FA8", "L-1CBB0490"),
    ),
    "MISTRAL.MISTRAL_LARGE_2402": model(
        "mistral.mistral-large-2402-v1:0", 1,
        regional=QuotaCodes("L-01447289", "L-3AF844DB"),
    ),
    "MISTRAL.MISTRAL_LARGE_2407": model(
        "mistral.mistral-large-2407-v1:0", 1,
        regional=QuotaCodes("L-01447289", "L-3AF844DB"),
    ),
    "MISTRAL.MISTRAL_LARGE_3": model(
        "mistral.mistral-large-3-675b-instruct", 1,
        regional=QuotaCodes("L-C709F563", "L-5B274E24"),
    ),
    "MISTRAL.MINISTRAL_3B": model(
        "mistral.ministral-3-3b-instruct", 1,
        regional=QuotaCodes("L-8A4BEE90", "L-DCA37E91"),
    ),
    "MISTRAL.MINISTRAL_8B": model(
        "mistral.ministral-3-8b-instruct", 1,
        regional=QuotaCodes("L-3B98F300", "L-2BDF9A55"),
    ),
    "MISTRAL.MINISTRAL_14B": model(
        "mistral.ministral-3-14b-instruct", 1,
        regional=QuotaCodes("L-334E5409", "L-99F7BDBC"),
    ),
    "MISTRAL.VOXTRAL_MINI": model(
        "mistral.voxtral-mini-3b-2507", 1,
        regional=QuotaCodes("L-0B767044", "L-17AE85BD"),
    ),
    "MISTRAL.VOXTRAL_SMALL": model(
        "mistral.voxtral-small-24b-2507", 1,
        regional=QuotaCodes("L-930E2896", "L-ACB2FB6A"),
    ),
    "COHERE.COMMAND_R": model(
        "cohere.command-r-v1:0", 1,
        regional=QuotaCodes("L-17F95AA4", "L-A49CA90F"),
    ),
    "COHERE.COMMAND_R_PLUS": model(
        "cohere.command-r-plus-v1:0", 1,
        regional=QuotaCodes("L-FEE1DCB6", "L-ADB4B3D7"),
    ),
    "COHERE.EMBED_ENGLISH_V3": model(
        "cohere.embed-english-v3", 1,
        regional=QuotaCodes("L-A2BE277A", "L-FF8E7864"),
    ),
    "COHERE.EMBED_MULTILINGUAL_V3": model(
        "cohere.embed-multilingual-v3", 1,
        regional=QuotaCodes("L-C2F86908", "L-9E5BD0C6"),
    ),
    "COHERE.EMBED_V4": model(
        "cohere.embed-v4:0", 1,
        regional=QuotaCodes("L-C47B85D5", "L-BE5FD99B"),
        cross_region=QuotaCodes("L-4C3F0FE6", "L-EB8C1F30"),
        global_cross_region=QuotaCodes("L-02DFBB76", "L-7089DC7D"),
    ),
    "AI21.JAMBA_1_5_LARGE": model(
        "ai21.jamba-1-5-large-v1:0", 1,
        regional=QuotaCodes("L-CFAB19FF", "L-F4CAA0FD"),
    ),
    "AI21.JAMBA_1_5_MINI": model(
        "ai21.jamba-1-5-mini-v1:0", 1,
        regional=QuotaCodes("L-5A778346", "L-0449ADC5"),
    ),
    "DEEPSEEK.DEEPSEEK_R1": model(
        "deepseek.r1-v1:0", 1,
        cross_region=QuotaCodes("L-06B03968", "L-F52323AB"),
    ),
    "QWEN.QWEN3_NEXT_80B": model(
        "qwen.qwen3-next-80b-a3b", 1,
        regional=QuotaCodes("L-37AB702E", "L-07B3CEEA"),
    ),
    "QWEN.QWEN3_32B": model(
        "qwen.qwen3-32b-v1:0", 1,
        regional=QuotaCodes("L-B7C52139", "L-E880C759"),
    ),
    "QWEN.QWEN3_CODER_30B": model(
        "qwen.qwen3-coder-480b-a35b-v1:0", 1,
        regional=QuotaCodes("L-92F81E14", "L-66EE6E0B"),
    ),
    "QWEN.QWEN3_VL_235B": model(
        "qwen.qwen3-235b-a22b-2507-v1:0", 1,
        regional=QuotaCodes("L-46063925", "L-11B56FB0"),
    ),
    "GOOGLE.GEMMA_3_4B": model(
        "google.gemma-3-4b-it", 1,
        regional=QuotaCodes("L-73FB8466", "L-3056DF33"),
    ),
    "GOOGLE.GEMMA_3_12B": model(
        "google.gemma-3-12b-it", 1,
        regional=QuotaCodes("L-3FD4A73E", "L-999037CA"),
    ),
    "GOOGLE.GEMMA_3_27B": model(
        "google.gemma-3-27b-it", 1,
        regional=QuotaCodes("L-F8729E94", "L-5D46C7AF"),
    ),
    "NVIDIA.NEMOTRON_NANO_2": model(
        "nvidia.nemotron-nano-9b-v2", 1,
        regional=QuotaCodes("L-33D3627D", "L-AC7B3FB9"),
    ),
    "NVIDIA.NEMOTRON_NANO_2_VL": model(
        "nvidia.nemotron-nano-12b-v2", 1,
        regional=QuotaCodes("L-A05A5476", "L-30B384EA"),
    ),
    "OPENAI.GPT_OSS_20B": model(
        "openai.gpt-oss-20b-1:0", 1,
        regional=QuotaCodes("L-036E14D8", "L-AF7F0545"),
    ),
    "OPENAI.GPT_OSS_120B": model(
        "openai.gpt-oss-120b-1:0", 1,
        regional=QuotaCodes("L-9DC5F595", "L-25B50707"),
    ),
    "OPENAI.GPT_OSS_SAFEGUARD_20B": model(
        "openai.gpt-oss-safeguard-20b", 1,
        regional=QuotaCodes("L-5D8F2F54", "L-65833D55"),
    ),
    "OPENAI.GPT_OSS_SAFEGUARD_120B": model(
        "openai.gpt-oss-safeguard-120b", 1,
        regional=QuotaCodes("L-594C7AC9", "L-C4E013EF"),
    ),
    "KIMI.K2_THINKING": model(
        "moonshot.kimi-k2-thinking", 1,
        regional=QuotaCodes("L-03579AC2", "L-02572418"),
    ),
    "MINIMAX.M2": model(
        "minimax.minimax-m2", 1,
        regional=QuotaCodes("L-A81B7C40", "L-828C986E"),
    ),
}
