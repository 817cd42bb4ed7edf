"""
Prerequisites stack
Operators, identity and GitOps wiring on top of the cluster stack
"""

import pulumi
from typing import Any, Dict

from ..config import PrerequisitesConfig
from ..context import DeploymentContext
from ..gitops import create_app_project, create_application
from ..identity import create_oidc_provider, create_operator_identity, create_operator_secrets
from ..operators import install_platform_operators, install_pulumi_operator
from ..stack_outputs import UpstreamStack

APPLICATION_NAME = "security-scanner"


def deploy(settings: PrerequisitesConfig) -> Dict[str, Any]:
    """Declare the prerequisites stack and return its outputs keyed by export name"""
    # Resolve every upstream output before the first declaration
    cluster_stack = UpstreamStack(settings.cluster_stack)
    kubeconfig = cluster_stack.require_output("kubeconfig")

    context = DeploymentContext(kubeconfig)

    identity = create_operator_identity(context)

    pulumi_operator = install_pulumi_operator(context)
    secrets = create_operator_secrets(
        context,
        pulumi_operator["release"],
        settings.pulumi_api_token,
        settings.aws_access_key_id,
        settings.aws_secret_access_key,
    )

    operators = install_platform_operators(context)
    argocd = operators["argocd"]

    oidc = create_oidc_provider(
        "kargo",
        domain_prefix=settings.cognito_domain_prefix,
        callback_urls=[settings.kargo_callback_url],
        logout_urls=[f"https://{settings.kargo_hostname}"],
    )

    project = create_app_project(context, [argocd["namespace"], argocd["manifest"]])
    application = create_application(
        context,
        project,
        name=APPLICATION_NAME,
        repo_url=settings.stack_manifests_repo,
    )
    pulumi.log.info(f"ArgoCD application {APPLICATION_NAME} tracks {settings.stack_manifests_repo}")

    return {
        "kubeconfig": kubeconfig,
        "serviceAccountName": identity["service_account_name"],
        "serviceAccountNamespace": identity["service_account_namespace"],
        "clusterRoleBindingName": identity["cluster_role_binding_name"],
        "secretName": secrets["secret_name"],
        "awsSecretName": secrets["aws_secret_name"],
        "pulumiOperatorStatus": pulumi_operator["status"],
        "argoCDAppName": application["application_name"],
        "oidcIssuerUrl": oidc["issuer_url"],
        "oidcClientId": oidc["client_id"],
        "cognitoUserPoolId": oidc["user_pool_id"],
        "cognitoDomain": oidc["domain_name"],
    }
