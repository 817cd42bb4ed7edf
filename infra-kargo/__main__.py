"""
Step 3: Kargo
Requires config: prereqsStack, kargoAdminPasswordHash, kargoTokenSigningKey
"""
from gitops_infra.config import KargoConfig
from gitops_infra.stack_outputs import export_outputs
from gitops_infra.stacks import kargo

export_outputs(kargo.deploy(KargoConfig.from_pulumi()))
