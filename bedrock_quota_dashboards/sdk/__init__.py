"""
SDK for Bedrock Quota Dashboards.

Provides client instrumentation that feeds the consumption estimates.
"""

from .bedrock_client import InstrumentedBedrock

__all__ = ["InstrumentedBedrock"]
