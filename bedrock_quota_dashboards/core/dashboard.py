"""
Dashboard entries and their validation against the quota registry.

Every entry is checked before anything is rendered or fetched; a single
error lists every offending entry so a build never half-succeeds.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .families import classify_model_family
from .registry import EndpointKind, ModelDescriptor, QuotaCodes, QuotaRegistry


class DashboardConfigurationError(ValueError):
    """Raised when one or more dashboard entries are invalid."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(
            "Invalid dashboard configurations found:\n"
            + "\n".join(self.errors)
            + "\n\nPlease check the quota mappings in the region-specific "
            "registry file for valid model/endpoint combinations."
        )


@dataclass(frozen=True)
class DashboardEntry:
    """A model and endpoint kind to monitor.

    auxiliary_model_ids lists further ModelId dimension values (e.g.
    application inference profiles) that draw from the same quota and
    are summed with the primary identity.
    """
    model: str
    endpoint: EndpointKind
    auxiliary_model_ids: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PlannedEntry:
    """A validated entry resolved against the registry."""
    entry: DashboardEntry
    descriptor: ModelDescriptor
    model_identity: str
    quota_codes: QuotaCodes

    @property
    def burndown_rate(self) -> int:
        return self.descriptor.output_token_burndown_rate

    @property
    def identities(self) -> Tuple[str, ...]:
        """Primary identity followed by the auxiliary ones."""
        return (self.model_identity,) + tuple(self.entry.auxiliary_model_ids)

    @property
    def family(self) -> str:
        return classify_model_family(self.descriptor.model_id)

    @property
    def endpoint(self) -> EndpointKind:
        return self.entry.endpoint


def validate_dashboard_entries(
    entries: Sequence[DashboardEntry],
    registry: QuotaRegistry,
) -> None:
    """Validate all entries use model/endpoint combinations the registry supports.

    Args:
        entries: Dashboard entries in declaration order
        registry: Registry for the active region

    Raises:
        DashboardConfigurationError: Listing every invalid entry
    """
    errors = []
    for index, entry in enumerate(entries):
        if entry.model not in registry:
            errors.append(
                f"Config {index}: Model '{entry.model}' not found in quota "
                f"registry for {registry.region}"
            )
            continue

        if not registry.supports(entry.model, entry.endpoint):
            supported = ", ".join(
                kind.value for kind in registry.supported_endpoints(entry.model)
            )
            errors.append(
                f"Config {index}: Model '{entry.model}' does not support endpoint "
                f"type '{entry.endpoint.value}'. Supported types: {supported}"
            )
            continue

        primary = registry.model_identity(entry.model, entry.endpoint)
        seen = {primary}
        for auxiliary in entry.auxiliary_model_ids:
            if not auxiliary:
                errors.append(f"Config {index}: Empty auxiliary model id for '{entry.model}'")
            elif auxiliary in seen:
                errors.append(
                    f"Config {index}: Auxiliary model id '{auxiliary}' is listed "
                    f"twice for '{entry.model}'"
                )
            seen.add(auxiliary)

    if errors:
        raise DashboardConfigurationError(errors)


def build_dashboard_plan(
    entries: Sequence[DashboardEntry],
    registry: QuotaRegistry,
) -> List[PlannedEntry]:
    """Validate entries and resolve them against the registry.

    Order of the returned plan follows declaration order.

    Raises:
        DashboardConfigurationError: If any entry is invalid
    """
    validate_dashboard_entries(entries, registry)

    plan = []
    for entry in entries:
        plan.append(PlannedEntry(
            entry=entry,
            descriptor=registry.get(entry.model),
            model_identity=registry.model_identity(entry.model, entry.endpoint),
            quota_codes=registry.lookup(entry.model, entry.endpoint),
        ))
    return plan


def ensure_region_matches(registry: QuotaRegistry, client_region: Optional[str]) -> None:
    """Fail when the registry table and the AWS client point at different regions.

    Quota codes are region-specific, so a mismatch would plot the wrong
    limits under correct-looking labels.

    Raises:
        DashboardConfigurationError: If the regions differ
    """
    if client_region is None:
        return
    if client_region != registry.region:
        raise DashboardConfigurationError([
            f"Quota registry is for region '{registry.region}' but AWS clients "
            f"are configured for '{client_region}'"
        ])
