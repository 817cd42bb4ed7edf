"""
Unit tests for the Kargo stack declaration
"""

import os
import sys
import unittest
from unittest.mock import patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gitops_infra.config import KargoConfig
from gitops_infra.errors import StackConfigurationError
from gitops_infra.kargo import ServiceAddress, kargo_values
from gitops_infra.kargo.functions import KARGO_CHART
from gitops_infra.stacks import kargo
from tests.helpers import recording_providers

PREREQS_STACK = "org/infra/prereqs-dev"
ISSUER = "https://cognito-idp.us-east-1.amazonaws.com/us-east-1_abc"
PREREQS_OUTPUTS = {
    "kubeconfig": "{\"kind\": \"Config\"}",
    "oidcIssuerUrl": ISSUER,
    "oidcClientId": "kargo-client",
}


def settings():
    return KargoConfig(
        prereqs_stack=PREREQS_STACK,
        admin_password_hash="$2a$10$hash",
        token_signing_key="signing-key",
        kargo_hostname="kargo.dev.example.com",
    )


class TestKargoStack(unittest.TestCase):

    def deploy(self, outputs=None):
        with recording_providers({PREREQS_STACK: outputs or PREREQS_OUTPUTS}) as recorder:
            stack_outputs = kargo.deploy(settings())
        return recorder, stack_outputs

    def test_release_values(self):
        recorder, _ = self.deploy()
        release = recorder.named("kargo")
        self.assertEqual(release.kwargs["chart"], KARGO_CHART)
        self.assertEqual(release.kwargs["namespace"], "kargo")
        self.assertTrue(release.kwargs["wait_for_jobs"])

        values = release.kwargs["values"]
        self.assertEqual(values["api"]["adminAccount"],
                         {"passwordHash": "$2a$10$hash", "tokenSigningKey": "signing-key"})
        self.assertEqual(values["api"]["service"], {"type": "LoadBalancer"})
        self.assertEqual(values["api"]["host"], "kargo.dev.example.com")
        self.assertTrue(values["api"]["rollouts"]["integrationEnabled"])
        self.assertTrue(values["controller"]["rollouts"]["integrationEnabled"])
        self.assertEqual(values["api"]["oidc"],
                         {"enabled": True, "issuerURL": ISSUER, "clientID": "kargo-client"})

    def test_api_service_read_after_release(self):
        recorder, _ = self.deploy()
        read = recorder.named("kargo-api-svc")
        self.assertEqual(read.type, "k8s.core.v1.Service.get")
        self.assertEqual(recorder.read_id(read), "kargo/kargo-api")
        self.assertIn(recorder.named("kargo"), recorder.dependencies(read))

    def test_api_service_id_is_deferred_on_release(self):
        recorder, _ = self.deploy()
        release = recorder.named("kargo")
        read = recorder.named("kargo-api-svc")
        self.assertNotIsInstance(read.args_id, str)
        self.assertIs(read.args_id, release.handle.status.apply.return_value)

    def test_outputs(self):
        _, outputs = self.deploy()
        self.assertEqual(set(outputs), {"kargoStatus", "kargoApiAddress", "kargoApiAddressReady"})

    def test_missing_oidc_output_fails_before_declaring(self):
        outputs = {"kubeconfig": "{}"}
        with recording_providers({PREREQS_STACK: outputs}) as recorder:
            with self.assertRaises(StackConfigurationError) as raised:
                kargo.deploy(settings())
        self.assertIn("oidcIssuerUrl", str(raised.exception))
        self.assertEqual(recorder.resources, [])

    def test_undeployed_prereqs_stack_fails_before_declaring(self):
        with recording_providers({}) as recorder:
            with self.assertRaises(StackConfigurationError):
                kargo.deploy(settings())
        self.assertEqual(recorder.resources, [])

    def test_pending_address_is_reported(self):
        with patch("gitops_infra.stacks.kargo.pulumi.log.warn") as warn:
            address = kargo._report(ServiceAddress.pending())
        self.assertFalse(address.is_ready)
        warn.assert_called_once()

    def test_ready_address_is_not_reported(self):
        with patch("gitops_infra.stacks.kargo.pulumi.log.warn") as warn:
            kargo._report(ServiceAddress.ready("https://kargo.elb.amazonaws.com"))
        warn.assert_not_called()


class TestKargoValues(unittest.TestCase):

    def test_oidc_always_enabled(self):
        values = kargo_values("hash", "key", "kargo.example.com", ISSUER, "kargo-client")
        self.assertEqual(values["api"]["oidc"],
                         {"enabled": True, "issuerURL": ISSUER, "clientID": "kargo-client"})


if __name__ == "__main__":
    unittest.main()
