"""
Region-specific quota registry tables.

Quota codes for the same model differ between regions, so exactly one
table is selected per deployment. To support another region, add a
module with REGION, CROSS_REGION_PREFIX and MODELS and list it below.
"""

from bedrock_quota_dashboards.core.registry import QuotaRegistry

from . import us_east_1, us_west_2

REGION_TABLES = {
    table.REGION: table
    for table in (us_east_1, us_west_2)
}


def available_regions():
    """Regions that ship a quota registry table."""
    return sorted(REGION_TABLES)


def load_registry(region: str) -> QuotaRegistry:
    """Build the quota registry for a region.

    Args:
        region: AWS region name, e.g. "us-east-1"

    Returns:
        Validated QuotaRegistry for that region

    Raises:
        ValueError: If no table exists for the region
    """
    table = REGION_TABLES.get(region)
    if table is None:
        raise ValueError(
            f"No quota registry for region '{region}'. "
            f"Available regions: {available_regions()}"
        )
    return QuotaRegistry(
        region=table.REGION,
        models=table.MODELS,
        cross_region_prefix=table.CROSS_REGION_PREFIX,
    )
