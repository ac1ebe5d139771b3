"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Declared API operations.
"""

from fennec.api.catalog import ENDPOINTS, get_endpoint, namespaces

__all__ = ["ENDPOINTS", "get_endpoint", "namespaces"]
