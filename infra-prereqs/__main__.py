"""
Step 2: Cluster prerequisites
Pulumi operator, cert-manager, ArgoCD, Argo Rollouts, Cognito and GitOps wiring
Requires config: clusterStack, pulumiApiToken, awsAccessKeyId,
awsSecretAccessKey, stackManifestsRepo
"""
from gitops_infra.config import PrerequisitesConfig
from gitops_infra.stack_outputs import export_outputs
from gitops_infra.stacks import prerequisites

export_outputs(prerequisites.deploy(PrerequisitesConfig.from_pulumi()))
