"""
Quota registry for Bedrock models.

Region-scoped catalog mapping each model and endpoint kind to the
Service Quotas codes that limit it, plus the output-token burndown rate.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from bedrock_quota_dashboards.log import get_logger

logger = get_logger(__name__)


class EndpointKind(Enum):
    """Invocation topologies a model may be reachable through."""
    REGIONAL = "regional"
    CROSS_REGION = "cross-region"
    GLOBAL_CROSS_REGION = "global-cross-region"


class RegistryError(ValueError):
    """Raised when a registry table violates its own invariants."""


@dataclass(frozen=True)
class QuotaCodes:
    """Service Quotas codes for one model/endpoint combination.

    Either code may be absent; image-generation models, for example,
    have a request quota but no token quota.
    """
    token_quota_code: Optional[str] = None
    request_quota_code: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.token_quota_code and not self.request_quota_code


@dataclass(frozen=True)
class ModelDescriptor:
    """One deployable model configuration."""
    model_id: str
    output_token_burndown_rate: int
    supported_endpoints: Tuple[EndpointKind, ...]
    quota_codes: Mapping[EndpointKind, QuotaCodes] = field(default_factory=dict)

    def __post_init__(self):
        """Validate descriptor shape."""
        object.__setattr__(self, "quota_codes", MappingProxyType(dict(self.quota_codes)))
        if not self.model_id:
            raise RegistryError("model_id cannot be empty")
        if self.output_token_burndown_rate <= 0:
            raise RegistryError(
                f"Model {self.model_id}: output_token_burndown_rate must be > 0"
            )
        if not self.supported_endpoints:
            raise RegistryError(
                f"Model {self.model_id}: at least one supported endpoint is required"
            )


def model(
    model_id: str,
    burndown_rate: int,
    regional: Optional[QuotaCodes] = None,
    cross_region: Optional[QuotaCodes] = None,
    global_cross_region: Optional[QuotaCodes] = None,
) -> ModelDescriptor:
    """Build a descriptor whose supported endpoints follow the codes given.

    Endpoint order is always regional, cross-region, global-cross-region.
    """
    codes: Dict[EndpointKind, QuotaCodes] = {}
    for kind, kind_codes in (
        (EndpointKind.REGIONAL, regional),
        (EndpointKind.CROSS_REGION, cross_region),
        (EndpointKind.GLOBAL_CROSS_REGION, global_cross_region),
    ):
        if kind_codes is not None:
            codes[kind] = kind_codes
    return ModelDescriptor(
        model_id=model_id,
        output_token_burndown_rate=burndown_rate,
        supported_endpoints=tuple(codes),
        quota_codes=codes,
    )


def validate_quota_codes(quota_codes: QuotaCodes, model_id: str) -> List[str]:
    """Return warnings for quota code pairs that are incomplete.

    Args:
        quota_codes: The codes to check
        model_id: Model identifier used in messages

    Returns:
        List of warning messages (empty if both codes are present)
    """
    warnings = []
    if quota_codes.is_empty:
        warnings.append(
            f"Model {model_id}: No quota codes provided. Consider adding both "
            f"token and request quota codes for complete monitoring."
        )
    elif not quota_codes.token_quota_code:
        warnings.append(
            f"Model {model_id}: Missing token quota code. Consider adding for "
            f"complete token usage monitoring."
        )
    elif not quota_codes.request_quota_code:
        warnings.append(
            f"Model {model_id}: Missing request quota code. Consider adding for "
            f"complete request monitoring."
        )
    return warnings


class QuotaRegistry:
    """Read-only catalog of model descriptors for a single AWS region.

    Models are addressed by key ("PROVIDER.NAME") rather than model id,
    since two entries can share a model id but draw from different quotas
    (e.g. the 1M-context variants of a model).
    """

    def __init__(
        self,
        region: str,
        models: Mapping[str, ModelDescriptor],
        cross_region_prefix: str = "us",
    ):
        """Build the registry and validate every supported combination.

        Args:
            region: AWS region these quota codes belong to
            models: Mapping of registry key to descriptor
            cross_region_prefix: Geography prefix of cross-region profiles

        Raises:
            RegistryError: If a supported endpoint has no quota codes at all
        """
        self.region = region
        self.cross_region_prefix = cross_region_prefix
        self._models: Dict[str, ModelDescriptor] = dict(models)

        errors = []
        for key, descriptor in self._models.items():
            for kind in descriptor.supported_endpoints:
                codes = self.lookup(key, kind)
                if codes is None or codes.is_empty:
                    errors.append(
                        f"{key} ({descriptor.model_id}) supports '{kind.value}' "
                        f"but defines no quota codes for it"
                    )
                    continue
                for warning in validate_quota_codes(codes, descriptor.model_id):
                    logger.warning("[Quota Config Warning] %s (%s)", warning, kind.value)
        if errors:
            raise RegistryError(
                f"Invalid quota registry for {region}:\n" + "\n".join(errors)
            )

    def __contains__(self, key: str) -> bool:
        return key in self._models

    def __len__(self) -> int:
        return len(self._models)

    def keys(self) -> List[str]:
        """Registry keys in declaration order."""
        return list(self._models)

    def get(self, key: str) -> Optional[ModelDescriptor]:
        """Return the descriptor for a key, or None if unknown."""
        return self._models.get(key)

    def lookup(self, key: str, endpoint_kind: EndpointKind) -> Optional[QuotaCodes]:
        """Get quota codes for a model and endpoint kind.

        Returns None when the model is unknown or the endpoint kind has no
        codes defined. Never raises.
        """
        descriptor = self._models.get(key)
        if descriptor is None:
            return None
        return descriptor.quota_codes.get(endpoint_kind)

    def supports(self, key: str, endpoint_kind: EndpointKind) -> bool:
        """Check if a model declares support for an endpoint kind."""
        descriptor = self._models.get(key)
        if descriptor is None:
            return False
        return endpoint_kind in descriptor.supported_endpoints

    def supported_endpoints(self, key: str) -> Tuple[EndpointKind, ...]:
        """Get the supported endpoint kinds of a model (empty if unknown)."""
        descriptor = self._models.get(key)
        if descriptor is None:
            return ()
        return descriptor.supported_endpoints

    def model_identity(self, key: str, endpoint_kind: EndpointKind) -> str:
        """Build the ModelId dimension value for a model and endpoint kind.

        Raises:
            KeyError: If the model is not in the registry
        """
        model_id = self._models[key].model_id
        if endpoint_kind == EndpointKind.CROSS_REGION:
            return f"{self.cross_region_prefix}.{model_id}"
        if endpoint_kind == EndpointKind.GLOBAL_CROSS_REGION:
            return f"global.{model_id}"
        return model_id


def parse_endpoint_kind(value: str) -> EndpointKind:
    """Parse an endpoint kind from its string form.

    Raises:
        ValueError: If the value is not a known endpoint kind
    """
    try:
        return EndpointKind(value.lower())
    except ValueError:
        valid = [kind.value for kind in EndpointKind]
        raise ValueError(f"Unknown endpoint kind '{value}'. Must be one of: {valid}")
