"""
Kargo Module Functions
Kargo Helm release and resolution of its load-balanced API address
"""

import pulumi
import pulumi_kubernetes as k8s
from typing import Any, Dict, List, NamedTuple, Optional

from ..context import DeploymentContext
from ..operators.functions import create_namespace

KARGO_CHART = "oci://ghcr.io/akuity/kargo-charts/kargo"
KARGO_NAMESPACE = "kargo"
KARGO_API_SERVICE = "kargo-api"
PENDING_ADDRESS = "LoadBalancer address pending..."


class ServiceAddress(NamedTuple):
    """Externally reachable address of a load-balanced Service, or pending"""

    is_ready: bool
    url: Optional[str] = None

    @classmethod
    def ready(cls, url: str) -> "ServiceAddress":
        return cls(True, url)

    @classmethod
    def pending(cls) -> "ServiceAddress":
        return cls(False, None)

    @property
    def display(self) -> str:
        return self.url if self.is_ready else PENDING_ADDRESS


def _field(obj, attr: str, key: str):
    # Typed outputs subclass dict but expose snake_case properties
    if obj is None:
        return None
    if hasattr(type(obj), attr):
        return getattr(obj, attr)
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, attr, None)


def resolve_service_address(status) -> ServiceAddress:
    """
    Pick the first load-balancer ingress entry and format it as an HTTPS URL

    A hostname wins over an IP. A status without ingress entries is pending,
    and so is a first entry carrying neither a hostname nor an IP; the next
    deploy re-reads it once the load balancer is provisioned.
    """
    load_balancer = _field(status, "load_balancer", "loadBalancer")
    ingress = _field(load_balancer, "ingress", "ingress")
    if not ingress:
        return ServiceAddress.pending()

    first = ingress[0]
    address = _field(first, "hostname", "hostname") or _field(first, "ip", "ip")
    if not address:
        return ServiceAddress.pending()
    return ServiceAddress.ready(f"https://{address}")


def lookup_service_address(context: DeploymentContext,
                           name: str,
                           service_id: pulumi.Input[str],
                           depends_on: List[pulumi.Resource] = None) -> pulumi.Output:
    """
    Read a live Service and derive its address without blocking the program

    Args:
        context: Deployment context for the target cluster
        name: Logical name of the read
        service_id: "<namespace>/<service>", deferred while the Service may not exist yet
        depends_on: Resources that create the Service

    Returns:
        Output resolving to a ServiceAddress
    """
    service = k8s.core.v1.Service.get(
        name,
        service_id,
        opts=context.options(depends_on=depends_on)
    )
    return service.status.apply(resolve_service_address)


def kargo_values(admin_password_hash,
                 token_signing_key,
                 hostname: str,
                 oidc_issuer_url,
                 oidc_client_id) -> Dict[str, Any]:
    """Helm values for a LoadBalancer-exposed Kargo with Rollouts integration and OIDC login"""
    api = {
        "host": hostname,
        "rollouts": {"integrationEnabled": True},
        "adminAccount": {
            "passwordHash": admin_password_hash,
            "tokenSigningKey": token_signing_key,
        },
        "service": {"type": "LoadBalancer"},
        "oidc": {
            "enabled": True,
            "issuerURL": oidc_issuer_url,
            "clientID": oidc_client_id,
        },
    }
    return {
        "api": api,
        "controller": {"rollouts": {"integrationEnabled": True}},
    }


def install_kargo(context: DeploymentContext,
                  values: Dict[str, Any],
                  namespace: str = KARGO_NAMESPACE) -> Dict[str, Any]:
    """
    Install Kargo into its own namespace and look up its API address

    Args:
        context: Deployment context for the target cluster
        values: Helm values, see kargo_values
        namespace: Namespace for Kargo

    Returns:
        Dict with namespace, release, status and address outputs
    """
    ns = create_namespace(context, namespace)

    release = k8s.helm.v3.Release(
        "kargo",
        chart=KARGO_CHART,
        namespace=ns.metadata.name,
        values=values,
        wait_for_jobs=True,
        opts=context.options(depends_on=[ns])
    )

    # Unknown until the release exists, so a first preview skips the read
    service_id = release.status.apply(
        lambda status: f"{_field(status, 'namespace', 'namespace') or namespace}/{KARGO_API_SERVICE}")

    address = lookup_service_address(
        context,
        "kargo-api-svc",
        service_id,
        depends_on=[release]
    )

    return {
        "namespace": ns,
        "release": release,
        "status": release.status,
        "address": address,
    }
