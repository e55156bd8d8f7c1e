"""Shared utility functions for orientax.

Provides angle conversion helpers and the JSON fetcher used by the
asynchronous data providers.
"""

from orientax.utils._angle import to_radians, zero_to_two_pi
from orientax.utils._download import JsonFetcher, fetch_json, is_remote

__all__ = [
    "JsonFetcher",
    "fetch_json",
    "is_remote",
    "to_radians",
    "zero_to_two_pi",
]
