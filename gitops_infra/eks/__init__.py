"""
EKS Module
Cluster, node group and kubeconfig synthesis
"""

from .functions import create_cluster, create_node_group
from .kubeconfig import create_kubeconfig, render_kubeconfig

__all__ = [
    "create_cluster",
    "create_node_group",
    "create_kubeconfig",
    "render_kubeconfig",
]
