"""
EKS Module Functions
Creates the EKS cluster and its managed node group
"""

import pulumi
import pulumi_aws as aws
from typing import Dict, List, Optional

from .kubeconfig import create_kubeconfig


def create_cluster(name: str,
                   cluster_role_arn: pulumi.Output[str],
                   subnet_ids: List[pulumi.Output[str]],
                   cluster_security_group_id: pulumi.Output[str],
                   depends_on: List[pulumi.Resource] = None,
                   cluster_name: Optional[str] = None,
                   tags: Dict[str, str] = None) -> Dict[str, any]:
    """
    Create EKS cluster and synthesize its kubeconfig

    Args:
        name: Resource name prefix
        cluster_role_arn: IAM role ARN for cluster
        subnet_ids: List of subnet IDs
        cluster_security_group_id: Security group ID for cluster
        depends_on: Resources the control plane needs first (role policy)
        cluster_name: Physical cluster name, auto-named when omitted
        tags: Additional tags

    Returns:
        Dict with cluster resource, kubeconfig and outputs
    """
    tags = tags or {}

    cluster = aws.eks.Cluster(
        f"{name}-cluster",
        name=cluster_name,
        role_arn=cluster_role_arn,
        vpc_config=aws.eks.ClusterVpcConfigArgs(
            subnet_ids=subnet_ids,
            security_group_ids=[cluster_security_group_id],
        ),
        tags={
            **tags,
            "Name": f"{name}-cluster",
        },
        opts=pulumi.ResourceOptions(depends_on=depends_on)
    )

    return {
        "cluster": cluster,
        "kubeconfig": create_kubeconfig(cluster),
        "cluster_name": cluster.name,
        "cluster_endpoint": cluster.endpoint,
    }


def create_node_group(name: str,
                      cluster_name: pulumi.Output[str],
                      node_role_arn: pulumi.Output[str],
                      subnet_ids: List[pulumi.Output[str]],
                      policy_attachments: List[aws.iam.RolePolicyAttachment],
                      instance_type: str = "t3.medium",
                      desired_size: int = 2,
                      min_size: int = 1,
                      max_size: int = 3,
                      tags: Dict[str, str] = None) -> Dict[str, any]:
    """
    Create EKS managed node group

    Args:
        name: Resource name prefix
        cluster_name: EKS cluster name
        node_role_arn: IAM role ARN for the nodes
        subnet_ids: List of subnet IDs
        policy_attachments: Node role policy attachments required for bootstrap
        instance_type: EC2 instance type for nodes
        desired_size: Desired number of nodes
        min_size: Minimum number of nodes
        max_size: Maximum number of nodes
        tags: Additional tags

    Returns:
        Dict with node group resource and outputs
    """
    tags = tags or {}

    node_group = aws.eks.NodeGroup(
        f"{name}-node-group",
        cluster_name=cluster_name,
        node_role_arn=node_role_arn,
        subnet_ids=subnet_ids,
        scaling_config=aws.eks.NodeGroupScalingConfigArgs(
            desired_size=desired_size,
            max_size=max_size,
            min_size=min_size,
        ),
        instance_types=[instance_type],
        tags={
            **tags,
            "Name": f"{name}-node-group",
        },
        # Without every attachment in place the nodes never register
        opts=pulumi.ResourceOptions(depends_on=list(policy_attachments))
    )

    return {
        "node_group": node_group,
        "node_group_status": node_group.status,
    }
