"""
Operators Module Functions
Cluster-wide operators installed from Helm charts and raw manifests
"""

import pulumi
import pulumi_kubernetes as k8s
from typing import Any, Callable, Dict, List

from ..context import DeploymentContext

PULUMI_OPERATOR_CHART = "oci://ghcr.io/pulumi/helm-charts/pulumi-kubernetes-operator"
PULUMI_OPERATOR_VERSION = "2.2.0"
CERT_MANAGER_MANIFEST = "https://github.com/cert-manager/cert-manager/releases/download/v1.19.0/cert-manager.yaml"
ARGOCD_MANIFEST = "https://raw.githubusercontent.com/argoproj/argo-cd/stable/manifests/install.yaml"
ARGO_ROLLOUTS_MANIFEST = "https://github.com/argoproj/argo-rollouts/releases/latest/download/install.yaml"


def namespace_transformation(namespace: str) -> Callable[[Dict[str, Any], pulumi.ResourceOptions], None]:
    """
    Build a manifest transformation that moves every object into `namespace`

    Objects without a metadata block are left untouched.
    """
    def set_namespace(obj: Dict[str, Any], _: pulumi.ResourceOptions = None):
        if obj.get("metadata") is None:
            return
        obj["metadata"]["namespace"] = namespace

    return set_namespace


def create_namespace(context: DeploymentContext, name: str) -> k8s.core.v1.Namespace:
    return k8s.core.v1.Namespace(
        f"{name}-ns",
        metadata=k8s.meta.v1.ObjectMetaArgs(
            name=name,
        ),
        opts=context.options()
    )


def install_manifest(context: DeploymentContext,
                     name: str,
                     url: str,
                     namespace: str = None,
                     depends_on: List[pulumi.Resource] = None) -> Dict[str, Any]:
    """
    Install a raw YAML manifest, optionally into its own namespace

    Args:
        context: Deployment context for the target cluster
        name: Resource name
        url: Manifest URL
        namespace: Namespace created for the manifest and rewritten into
            every object; manifests that ship their own namespaces pass None
        depends_on: Additional resources the install waits for

    Returns:
        Dict with the manifest resource and its namespace
    """
    depends_on = list(depends_on or [])
    transformations = []
    ns = None

    if namespace:
        ns = create_namespace(context, namespace)
        depends_on.append(ns)
        transformations.append(namespace_transformation(namespace))

    pulumi.log.info(f"Installing {name} from {url}")
    manifest = k8s.yaml.ConfigFile(
        name,
        file=url,
        transformations=transformations or None,
        opts=context.options(depends_on=depends_on)
    )

    return {
        "namespace": ns,
        "manifest": manifest,
    }


def install_pulumi_operator(context: DeploymentContext,
                            namespace: str = "pulumi-kubernetes-operator") -> Dict[str, Any]:
    """
    Install the Pulumi Kubernetes Operator Helm chart into its own namespace

    Args:
        context: Deployment context for the target cluster
        namespace: Namespace for the operator

    Returns:
        Dict with namespace, release and status output
    """
    ns = create_namespace(context, namespace)

    release = k8s.helm.v3.Release(
        "pulumi-kubernetes-operator",
        chart=PULUMI_OPERATOR_CHART,
        version=PULUMI_OPERATOR_VERSION,
        namespace=ns.metadata.name,
        opts=context.options(depends_on=[ns])
    )

    return {
        "namespace": ns,
        "release": release,
        "status": release.status,
    }


def install_platform_operators(context: DeploymentContext) -> Dict[str, Any]:
    """
    Install cert-manager, ArgoCD and Argo Rollouts

    Returns:
        Dict keyed by operator with each install's resources
    """
    return {
        "cert_manager": install_manifest(context, "cert-manager", CERT_MANAGER_MANIFEST),
        "argocd": install_manifest(context, "argocd", ARGOCD_MANIFEST, namespace="argocd"),
        "argo_rollouts": install_manifest(context, "argo-rollouts", ARGO_ROLLOUTS_MANIFEST,
                                          namespace="argo-rollouts"),
    }
