"""
Core modules for Bedrock Quota Dashboards.

This package contains the quota registry, limit fetching, consumption
estimation, and dashboard rendering.
"""
