"""
Operators Module
Pulumi Kubernetes Operator, cert-manager, ArgoCD and Argo Rollouts
"""

from .functions import (
    create_namespace,
    install_manifest,
    install_platform_operators,
    install_pulumi_operator,
    namespace_transformation,
)

__all__ = [
    "create_namespace",
    "install_manifest",
    "install_platform_operators",
    "install_pulumi_operator",
    "namespace_transformation",
]
