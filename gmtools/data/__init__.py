"""
Data Fetcher Layer.

Retrieves reference tables (encounters, names, treasure, ...) from the static
JSON data store. A fetch either returns the parsed document or raises
DataUnavailable; there is no caching and no retry.
"""

from gmtools.data.fetcher import DataUnavailable, HttpTableFetcher, TableFetcher

__all__ = [
    "DataUnavailable",
    "HttpTableFetcher",
    "TableFetcher",
]
