"""
Kubeconfig synthesis for a freshly created EKS cluster
"""

import json
import pulumi
import pulumi_aws as aws

EXEC_API_VERSION = "client.authentication.k8s.io/v1beta1"


def render_kubeconfig(endpoint: str, certificate_authority_data: str, cluster_name: str) -> str:
    """
    Serialize a client configuration that mints tokens through `aws eks get-token`

    Pure: identical inputs always give a byte-identical document.
    """
    return json.dumps({
        "apiVersion": "v1",
        "kind": "Config",
        "clusters": [{
            "cluster": {
                "server": endpoint,
                "certificate-authority-data": certificate_authority_data,
            },
            "name": "kubernetes",
        }],
        "contexts": [{
            "context": {
                "cluster": "kubernetes",
                "user": "aws",
            },
            "name": "aws",
        }],
        "current-context": "aws",
        "users": [{
            "name": "aws",
            "user": {
                "exec": {
                    "apiVersion": EXEC_API_VERSION,
                    "command": "aws",
                    "args": ["eks", "get-token", "--cluster-name", cluster_name],
                },
            },
        }],
    })


def create_kubeconfig(cluster: aws.eks.Cluster) -> pulumi.Output[str]:
    """Kubeconfig resolving once endpoint, CA data and name are all known"""
    return pulumi.Output.all(
        cluster.endpoint,
        cluster.certificate_authority.data,
        cluster.name
    ).apply(lambda args: render_kubeconfig(args[0], args[1], args[2]))
