"""
GitOps Module Functions
ArgoCD AppProject and Application wiring the cluster to a manifests repository
"""

import pulumi
import pulumi_kubernetes as k8s
from typing import Any, Dict, List

from ..context import DeploymentContext

ARGOCD_API_VERSION = "argoproj.io/v1alpha1"
IN_CLUSTER_SERVER = "https://kubernetes.default.svc"


def create_app_project(context: DeploymentContext,
                       argocd_install: List[pulumi.Resource],
                       name: str = "default",
                       namespace: str = "argocd") -> k8s.apiextensions.CustomResource:
    """Unrestricted AppProject; waits for the ArgoCD install that serves its CRD"""
    return k8s.apiextensions.CustomResource(
        f"{name}-project",
        api_version=ARGOCD_API_VERSION,
        kind="AppProject",
        metadata=k8s.meta.v1.ObjectMetaArgs(
            name=name,
            namespace=namespace,
        ),
        spec={
            "sourceRepos": ["*"],
            "destinations": [{"namespace": "*", "server": "*"}],
            "clusterResourceWhitelist": [{"group": "*", "kind": "*"}],
        },
        opts=context.options(depends_on=argocd_install)
    )


def create_application(context: DeploymentContext,
                       project: k8s.apiextensions.CustomResource,
                       name: str,
                       repo_url: str,
                       project_name: str = "default",
                       path: str = "stacks",
                       target_revision: str = "main",
                       destination_namespace: str = "default",
                       namespace: str = "argocd") -> Dict[str, Any]:
    """
    Create an ArgoCD Application continuously syncing a repository path

    Args:
        context: Deployment context for the target cluster
        project: AppProject the application belongs to
        name: Application name
        repo_url: Git repository holding the manifests
        project_name: Name of the AppProject
        path: Directory inside the repository
        target_revision: Branch, tag or commit to track
        destination_namespace: Namespace the manifests are applied to
        namespace: Namespace ArgoCD runs in

    Returns:
        Dict with application resource and outputs
    """
    application = k8s.apiextensions.CustomResource(
        f"{name}-app",
        api_version=ARGOCD_API_VERSION,
        kind="Application",
        metadata=k8s.meta.v1.ObjectMetaArgs(
            name=name,
            namespace=namespace,
        ),
        spec={
            "project": project_name,
            "source": {
                "repoURL": repo_url,
                "targetRevision": target_revision,
                "path": path,
            },
            "destination": {
                "server": IN_CLUSTER_SERVER,
                "namespace": destination_namespace,
            },
            "syncPolicy": {
                "automated": {"prune": True, "selfHeal": True},
                "syncOptions": ["CreateNamespace=true"],
            },
        },
        opts=context.options(depends_on=[project])
    )

    return {
        "application": application,
        "application_name": application.metadata.name,
    }
