"""
Outbound services
"""

from .metadata import LinkMetadata, MetadataFetcher, fetch_open_graph

__all__ = ["LinkMetadata", "MetadataFetcher", "fetch_open_graph"]
