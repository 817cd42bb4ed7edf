"""
Kargo stack
GitOps delivery platform on top of the prerequisites stack
"""

import pulumi
from typing import Any, Dict

from ..config import KargoConfig
from ..context import DeploymentContext
from ..kargo import ServiceAddress, install_kargo, kargo_values
from ..stack_outputs import UpstreamStack


def _report(address: ServiceAddress) -> ServiceAddress:
    if not address.is_ready:
        pulumi.log.warn("Kargo API load balancer has no address yet; run another deploy once it is provisioned")
    return address


def deploy(settings: KargoConfig) -> Dict[str, Any]:
    """Declare the Kargo stack and return its outputs keyed by export name"""
    prereqs_stack = UpstreamStack(settings.prereqs_stack)
    kubeconfig = prereqs_stack.require_output("kubeconfig")
    oidc_issuer_url = prereqs_stack.require_output("oidcIssuerUrl")
    oidc_client_id = prereqs_stack.require_output("oidcClientId")

    context = DeploymentContext(kubeconfig)

    kargo = install_kargo(
        context,
        kargo_values(
            settings.admin_password_hash,
            settings.token_signing_key,
            settings.kargo_hostname,
            oidc_issuer_url=oidc_issuer_url,
            oidc_client_id=oidc_client_id,
        ),
    )
    address = kargo["address"].apply(_report)

    return {
        "kargoStatus": kargo["status"],
        "kargoApiAddress": address.apply(lambda a: a.display),
        "kargoApiAddressReady": address.apply(lambda a: a.is_ready),
    }
