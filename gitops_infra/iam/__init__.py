"""
IAM Module
Roles for the EKS control plane and worker nodes
"""

from .functions import create_cluster_role, create_node_role

__all__ = ["create_cluster_role", "create_node_role"]
