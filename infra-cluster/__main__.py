"""
Step 1: EKS cluster
VPC, IAM roles, cluster and node group; exports the kubeconfig
"""
from gitops_infra.config import ClusterConfig
from gitops_infra.stack_outputs import export_outputs
from gitops_infra.stacks import cluster

export_outputs(cluster.deploy(ClusterConfig.from_pulumi()))
