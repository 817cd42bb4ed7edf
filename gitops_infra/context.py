"""
Deployment context
Single Kubernetes connectivity handle threaded through every declaration
"""

import pulumi
import pulumi_kubernetes as k8s
from typing import Optional, Sequence


class DeploymentContext:
    """
    Per-stack Kubernetes provider built from an upstream kubeconfig

    Every Kubernetes resource takes its options from `options()`, so the
    engine orders all of them after the upstream cluster exists.
    """

    def __init__(self, kubeconfig, name: str = "k8s-provider"):
        self.kubeconfig = kubeconfig
        self.provider = k8s.Provider(name, kubeconfig=kubeconfig)

    def options(self, depends_on: Optional[Sequence[pulumi.Resource]] = None) -> pulumi.ResourceOptions:
        return pulumi.ResourceOptions(
            provider=self.provider,
            depends_on=list(depends_on) if depends_on else None)
