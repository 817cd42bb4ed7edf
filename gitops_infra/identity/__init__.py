"""
Identity Module
Operator service account, credentials and the Cognito OIDC provider
"""

from .functions import create_oidc_provider, create_operator_identity, create_operator_secrets

__all__ = [
    "create_operator_identity",
    "create_operator_secrets",
    "create_oidc_provider",
]
