"""
Kargo Module
Kargo installation and API address resolution
"""

from .functions import (
    PENDING_ADDRESS,
    ServiceAddress,
    install_kargo,
    kargo_values,
    lookup_service_address,
    resolve_service_address,
)

__all__ = [
    "PENDING_ADDRESS",
    "ServiceAddress",
    "install_kargo",
    "kargo_values",
    "lookup_service_address",
    "resolve_service_address",
]
