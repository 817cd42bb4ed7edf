"""
VPC Module
Network substrate for the EKS cluster
"""

from .functions import create_public_route_table, create_public_subnets, create_security_groups, create_vpc

__all__ = [
    "create_vpc",
    "create_public_subnets",
    "create_public_route_table",
    "create_security_groups",
]
