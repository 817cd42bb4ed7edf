"""
Creation-order checks over the declared dependency graph
Every resource placed into a namespace created by the same stack must reach
that namespace through explicit dependency edges
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gitops_infra.config import KargoConfig, PrerequisitesConfig
from gitops_infra.stacks import kargo, prerequisites
from tests.helpers import recording_providers

CLUSTER_STACK = "org/infra/cluster-dev"
PREREQS_STACK = "org/infra/prereqs-dev"
DEPLOYED = {
    CLUSTER_STACK: {"kubeconfig": "{}"},
    PREREQS_STACK: {
        "kubeconfig": "{}",
        "oidcIssuerUrl": "https://cognito-idp.us-east-1.amazonaws.com/us-east-1_abc",
        "oidcClientId": "client",
    },
}


def target_namespaces(recorder, resource):
    """Namespaces a recorded resource populates"""
    namespaces = set()
    if resource.metadata.get("namespace"):
        namespaces.add(resource.metadata["namespace"])
    if isinstance(resource.kwargs.get("namespace"), str):
        namespaces.add(resource.kwargs["namespace"])
    for transformation in resource.kwargs.get("transformations") or []:
        sample = {"metadata": {}}
        transformation(sample, None)
        if sample["metadata"].get("namespace"):
            namespaces.add(sample["metadata"]["namespace"])
    if resource.type.endswith(".get"):
        read_id = recorder.read_id(resource)
        if "/" in read_id:
            namespaces.add(read_id.split("/")[0])
    return namespaces


class TestNamespaceOrdering(unittest.TestCase):

    def assert_namespaces_precede_contents(self, recorder):
        created = {ns.metadata["name"]: ns for ns in recorder.of_type("k8s.core.v1.Namespace")}
        self.assertTrue(created, "stack creates no namespaces")
        checked = 0
        for resource in recorder.resources:
            if resource.type == "k8s.core.v1.Namespace":
                continue
            for namespace in target_namespaces(recorder, resource) & set(created):
                checked += 1
                with self.subTest(resource=resource.name, namespace=namespace):
                    self.assertTrue(
                        recorder.depends_on(resource, created[namespace]),
                        f"{resource.name} populates {namespace} without depending on it")
        self.assertGreater(checked, 0)

    def test_prerequisites_stack(self):
        settings = PrerequisitesConfig(
            cluster_stack=CLUSTER_STACK,
            pulumi_api_token="token",
            aws_access_key_id="id",
            aws_secret_access_key="secret",
            stack_manifests_repo="https://github.com/example/manifests",
        )
        with recording_providers(DEPLOYED) as recorder:
            prerequisites.deploy(settings)
        self.assert_namespaces_precede_contents(recorder)

    def test_kargo_stack(self):
        settings = KargoConfig(
            prereqs_stack=PREREQS_STACK,
            admin_password_hash="hash",
            token_signing_key="key",
        )
        with recording_providers(DEPLOYED) as recorder:
            kargo.deploy(settings)
        self.assert_namespaces_precede_contents(recorder)


if __name__ == "__main__":
    unittest.main()
