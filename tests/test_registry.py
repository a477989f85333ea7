"""
Unit tests for the quota registry.

Tests lookup semantics, construction-time validation and the shipped
region tables.
"""

from unittest.mock import patch

import pytest

from bedrock_quota_dashboards.core.regions import available_regions, load_registry
from bedrock_quota_dashboards.core.registry import (
    EndpointKind,
    ModelDescriptor,
    QuotaCodes,
    QuotaRegistry,
    RegistryError,
    model,
    parse_endpoint_kind,
    validate_quota_codes,
)


class TestLookup:
    """Test lookup, support and identity resolution."""

    def test_lookup_returns_codes_for_supported_kind(self, fixture_registry):
        codes = fixture_registry.lookup("AMAZON.NOVA_LITE_V1", EndpointKind.CROSS_REGION)
        assert codes == QuotaCodes("L-CR-TOK", "L-CR-REQ")

    def test_lookup_unknown_model_returns_none(self, fixture_registry):
        assert fixture_registry.lookup("AMAZON.MISSING", EndpointKind.REGIONAL) is None

    def test_lookup_undefined_kind_returns_none(self, fixture_registry):
        assert fixture_registry.lookup(
            "ANTHROPIC.CLAUDE_SONNET_4_5", EndpointKind.REGIONAL
        ) is None

    def test_supports(self, fixture_registry):
        assert fixture_registry.supports("AMAZON.NOVA_LITE_V1", EndpointKind.REGIONAL)
        assert not fixture_registry.supports("AMAZON.NOVA_LITE_V1", EndpointKind.GLOBAL_CROSS_REGION)
        assert not fixture_registry.supports("AMAZON.MISSING", EndpointKind.REGIONAL)

    def test_supported_endpoints_in_declaration_order(self, fixture_registry):
        assert fixture_registry.supported_endpoints("ANTHROPIC.CLAUDE_SONNET_4_5") == (
            EndpointKind.CROSS_REGION,
            EndpointKind.GLOBAL_CROSS_REGION,
        )

    def test_supported_endpoints_unknown_model_is_empty(self, fixture_registry):
        assert fixture_registry.supported_endpoints("AMAZON.MISSING") == ()

    def test_model_identity_prefixes(self, fixture_registry):
        key = "ANTHROPIC.CLAUDE_SONNET_4_5"
        assert fixture_registry.model_identity("AMAZON.NOVA_LITE_V1", EndpointKind.REGIONAL) == "amazon.nova-lite-v1:0"
        assert fixture_registry.model_identity(key, EndpointKind.CROSS_REGION) == (
            "us.anthropic.claude-sonnet-4-5-20250929-v1:0"
        )
        assert fixture_registry.model_identity(key, EndpointKind.GLOBAL_CROSS_REGION) == (
            "global.anthropic.claude-sonnet-4-5-20250929-v1:0"
        )

    def test_model_identity_unknown_model_raises(self, fixture_registry):
        with pytest.raises(KeyError):
            fixture_registry.model_identity("AMAZON.MISSING", EndpointKind.REGIONAL)

    def test_cross_region_prefix_comes_from_registry(self):
        registry = QuotaRegistry(
            region="eu-west-1",
            models={"X.Y": model("x.y-v1:0", 1, cross_region=QuotaCodes("L-1", "L-2"))},
            cross_region_prefix="eu",
        )
        assert registry.model_identity("X.Y", EndpointKind.CROSS_REGION) == "eu.x.y-v1:0"


class TestRegistryValidation:
    """Test construction-time validation."""

    def test_supported_kind_without_codes_is_rejected(self):
        descriptor = ModelDescriptor(
            model_id="amazon.broken-v1:0",
            output_token_burndown_rate=1,
            supported_endpoints=(EndpointKind.REGIONAL, EndpointKind.CROSS_REGION),
            quota_codes={EndpointKind.REGIONAL: QuotaCodes("L-1", "L-2")},
        )
        with pytest.raises(RegistryError, match="supports 'cross-region'"):
            QuotaRegistry(region="us-east-1", models={"AMAZON.BROKEN": descriptor})

    def test_supported_kind_with_empty_pair_is_rejected(self):
        descriptor = model("amazon.broken-v1:0", 1, regional=QuotaCodes())
        with pytest.raises(RegistryError, match="defines no quota codes"):
            QuotaRegistry(region="us-east-1", models={"AMAZON.BROKEN": descriptor})

    def test_every_violation_is_reported(self):
        models = {
            "A.ONE": model("a.one", 1, regional=QuotaCodes()),
            "A.TWO": model("a.two", 1, cross_region=QuotaCodes()),
        }
        with pytest.raises(RegistryError) as exc_info:
            QuotaRegistry(region="us-east-1", models=models)
        assert "A.ONE" in str(exc_info.value)
        assert "A.TWO" in str(exc_info.value)

    def test_partial_codes_log_a_warning(self):
        with patch("bedrock_quota_dashboards.core.registry.logger") as mock_logger:
            QuotaRegistry(
                region="us-east-1",
                models={"A.CANVAS": model("a.canvas", 1, regional=QuotaCodes(request_quota_code="L-1"))},
            )
        mock_logger.warning.assert_called_once()
        assert "Missing token quota code" in mock_logger.warning.call_args[0][1]

    def test_descriptor_rejects_bad_burndown_rate(self):
        with pytest.raises(RegistryError, match="burndown_rate"):
            model("a.model", 0, regional=QuotaCodes("L-1", "L-2"))

    def test_descriptor_requires_an_endpoint(self):
        with pytest.raises(RegistryError, match="at least one supported endpoint"):
            model("a.model", 1)

    def test_descriptor_codes_are_read_only(self):
        codes = {EndpointKind.REGIONAL: QuotaCodes("L-1", "L-2")}
        descriptor = ModelDescriptor("a.model", 1, (EndpointKind.REGIONAL,), codes)
        codes[EndpointKind.CROSS_REGION] = QuotaCodes("L-3", "L-4")

        with pytest.raises(TypeError):
            descriptor.quota_codes[EndpointKind.REGIONAL] = QuotaCodes("L-9", "L-9")
        assert list(descriptor.quota_codes) == [EndpointKind.REGIONAL]

    def test_shared_region_table_cannot_be_modified(self):
        registry = load_registry("us-east-1")
        descriptor = registry.get(registry.keys()[0])
        with pytest.raises(TypeError):
            descriptor.quota_codes[EndpointKind.GLOBAL_CROSS_REGION] = QuotaCodes("L-9", "L-9")

    def test_validate_quota_codes_messages(self):
        assert validate_quota_codes(QuotaCodes("L-1", "L-2"), "m") == []
        assert "No quota codes" in validate_quota_codes(QuotaCodes(), "m")[0]
        assert "Missing request quota code" in validate_quota_codes(QuotaCodes("L-1"), "m")[0]


class TestParseEndpointKind:
    """Test endpoint kind parsing."""

    def test_known_values(self):
        assert parse_endpoint_kind("regional") == EndpointKind.REGIONAL
        assert parse_endpoint_kind("Cross-Region") == EndpointKind.CROSS_REGION
        assert parse_endpoint_kind("global-cross-region") == EndpointKind.GLOBAL_CROSS_REGION

    def test_unknown_value(self):
        with pytest.raises(ValueError, match="Must be one of"):
            parse_endpoint_kind("edge")


class TestRegionTables:
    """Test the shipped region tables."""

    def test_available_regions(self):
        assert available_regions() == ["us-east-1", "us-west-2"]

    @pytest.mark.parametrize("region", ["us-east-1", "us-west-2"])
    def test_every_supported_kind_resolves(self, region):
        registry = load_registry(region)
        assert len(registry) > 0
        for key in registry.keys():
            for kind in registry.supported_endpoints(key):
                codes = registry.lookup(key, kind)
                assert codes is not None, f"{key} {kind.value}"
                assert not codes.is_empty, f"{key} {kind.value}"

    @pytest.mark.parametrize("region", ["us-east-1", "us-west-2"])
    def test_burndown_rates_are_one_or_five(self, region):
        registry = load_registry(region)
        for key in registry.keys():
            assert registry.get(key).output_token_burndown_rate in (1, 5)

    def test_newer_claude_models_burn_down_at_five(self):
        registry = load_registry("us-east-1")
        assert registry.get("ANTHROPIC.CLAUDE_SONNET_4_5").output_token_burndown_rate == 5
        assert registry.get("ANTHROPIC.CLAUDE_3_HAIKU").output_token_burndown_rate == 1

    def test_image_model_has_request_quota_only(self):
        codes = load_registry("us-east-1").lookup("AMAZON.NOVA_CANVAS_V1", EndpointKind.REGIONAL)
        assert codes.token_quota_code is None
        assert codes.request_quota_code == "L-3F26CE29"

    def test_same_model_differs_between_regions(self):
        east = load_registry("us-east-1")
        west = load_registry("us-west-2")
        assert east.supports("AMAZON.NOVA_MICRO_V1", EndpointKind.REGIONAL)
        assert not west.supports("AMAZON.NOVA_MICRO_V1", EndpointKind.REGIONAL)

    def test_unknown_region(self):
        with pytest.raises(ValueError, match="No quota registry for region 'eu-central-1'"):
            load_registry("eu-central-1")
