"""
Identity Module Functions
Cluster-scoped identity for the Pulumi operator and the Cognito OIDC provider
"""

import pulumi
import pulumi_aws as aws
import pulumi_kubernetes as k8s
from typing import Any, Dict, List

from ..context import DeploymentContext

SERVICE_ACCOUNT_NAME = "pulumi"
SERVICE_ACCOUNT_NAMESPACE = "default"
OIDC_SCOPES = ["openid", "email", "profile"]


def create_operator_identity(context: DeploymentContext,
                             name: str = SERVICE_ACCOUNT_NAME,
                             namespace: str = SERVICE_ACCOUNT_NAMESPACE) -> Dict[str, Any]:
    """
    Create the operator service account bound to system:auth-delegator

    The binding grants TokenReview and SubjectAccessReview.

    Args:
        context: Deployment context for the target cluster
        name: Service account name
        namespace: Service account namespace

    Returns:
        Dict with service account, binding and outputs
    """
    service_account = k8s.core.v1.ServiceAccount(
        name,
        metadata=k8s.meta.v1.ObjectMetaArgs(
            name=name,
            namespace=namespace,
        ),
        opts=context.options()
    )

    binding_name = f"{namespace}:{name}:system:auth-delegator"
    cluster_role_binding = k8s.rbac.v1.ClusterRoleBinding(
        binding_name.replace(":", "-"),
        metadata=k8s.meta.v1.ObjectMetaArgs(
            name=binding_name,
        ),
        subjects=[k8s.rbac.v1.SubjectArgs(
            kind="ServiceAccount",
            name=name,
            namespace=namespace,
        )],
        role_ref=k8s.rbac.v1.RoleRefArgs(
            kind="ClusterRole",
            name="system:auth-delegator",
            api_group="rbac.authorization.k8s.io",
        ),
        opts=context.options(depends_on=[service_account])
    )

    return {
        "service_account": service_account,
        "cluster_role_binding": cluster_role_binding,
        "service_account_name": service_account.metadata.name,
        "service_account_namespace": service_account.metadata.namespace,
        "cluster_role_binding_name": cluster_role_binding.metadata.name,
    }


def create_operator_secrets(context: DeploymentContext,
                            operator: pulumi.Resource,
                            pulumi_api_token,
                            aws_access_key_id,
                            aws_secret_access_key,
                            namespace: str = SERVICE_ACCOUNT_NAMESPACE) -> Dict[str, Any]:
    """
    Create the secrets that operator-managed stacks read their credentials from

    Args:
        context: Deployment context for the target cluster
        operator: Operator installation the secrets are consumed by
        pulumi_api_token: Pulumi Cloud access token (secret)
        aws_access_key_id: AWS access key ID (secret)
        aws_secret_access_key: AWS secret access key (secret)
        namespace: Namespace to create the secrets in

    Returns:
        Dict with secret resources and outputs
    """
    access_token = k8s.core.v1.Secret(
        "accessToken",
        metadata=k8s.meta.v1.ObjectMetaArgs(
            name="pulumi-api-secret",
            namespace=namespace,
        ),
        string_data={"accessToken": pulumi_api_token},
        opts=context.options(depends_on=[operator])
    )

    aws_credentials = k8s.core.v1.Secret(
        "awsAccessToken",
        metadata=k8s.meta.v1.ObjectMetaArgs(
            name="pulumi-aws-secret",
            namespace=namespace,
        ),
        string_data={
            "awsAccessKeyId": aws_access_key_id,
            "secretAccessKey": aws_secret_access_key,
        },
        opts=context.options(depends_on=[operator])
    )

    return {
        "access_token": access_token,
        "aws_credentials": aws_credentials,
        "secret_name": access_token.metadata.name,
        "aws_secret_name": aws_credentials.metadata.name,
    }


def create_oidc_provider(name: str,
                         domain_prefix: str,
                         callback_urls: List[str],
                         logout_urls: List[str] = None,
                         tags: Dict[str, str] = None) -> Dict[str, Any]:
    """
    Create a Cognito user pool, hosted domain and public app client

    The app client uses the authorization code flow without a client
    secret, which is what browser and CLI logins to Kargo expect.

    Args:
        name: Resource name prefix
        domain_prefix: Hosted UI domain prefix, unique per region
        callback_urls: Allowed redirect URLs after login
        logout_urls: Allowed redirect URLs after logout
        tags: Additional tags

    Returns:
        Dict with Cognito resources and OIDC outputs
    """
    tags = tags or {}
    logout_urls = logout_urls or []

    user_pool = aws.cognito.UserPool(
        f"{name}-user-pool",
        auto_verified_attributes=["email"],
        username_attributes=["email"],
        admin_create_user_config=aws.cognito.UserPoolAdminCreateUserConfigArgs(
            allow_admin_create_user_only=True,
        ),
        password_policy=aws.cognito.UserPoolPasswordPolicyArgs(
            minimum_length=12,
            require_lowercase=True,
            require_uppercase=True,
            require_numbers=True,
            require_symbols=True,
        ),
        tags={
            **tags,
            "Name": f"{name}-user-pool",
        }
    )

    domain = aws.cognito.UserPoolDomain(
        f"{name}-domain",
        domain=domain_prefix,
        user_pool_id=user_pool.id,
        opts=pulumi.ResourceOptions(depends_on=[user_pool])
    )

    client = aws.cognito.UserPoolClient(
        f"{name}-client",
        user_pool_id=user_pool.id,
        generate_secret=False,
        allowed_oauth_flows_user_pool_client=True,
        allowed_oauth_flows=["code"],
        allowed_oauth_scopes=OIDC_SCOPES,
        supported_identity_providers=["COGNITO"],
        callback_urls=callback_urls,
        logout_urls=logout_urls,
        opts=pulumi.ResourceOptions(depends_on=[user_pool])
    )

    # endpoint is "cognito-idp.<region>.amazonaws.com/<pool id>"
    issuer_url = user_pool.endpoint.apply(lambda endpoint: f"https://{endpoint}")

    return {
        "user_pool": user_pool,
        "domain": domain,
        "client": client,
        "user_pool_id": user_pool.id,
        "domain_name": domain.domain,
        "client_id": client.id,
        "issuer_url": issuer_url,
    }
