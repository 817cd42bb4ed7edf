"""
IAM Module Functions
Creates IAM roles and policy attachments for the EKS cluster and worker nodes
"""

import json
import pulumi_aws as aws
from typing import Dict

NODE_POLICY_ARNS = {
    "worker": "arn:aws:iam::aws:policy/AmazonEKSWorkerNodePolicy",
    "cni": "arn:aws:iam::aws:policy/AmazonEKS_CNI_Policy",
    "registry": "arn:aws:iam::aws:policy/AmazonEC2ContainerRegistryReadOnly",
}


def assume_role_policy(service: str) -> str:
    """Trust policy letting an AWS service principal assume the role"""
    return json.dumps({
        "Version": "2012-10-17",
        "Statement": [{
            "Action": "sts:AssumeRole",
            "Effect": "Allow",
            "Principal": {"Service": service},
        }],
    })


def create_cluster_role(name: str, tags: Dict[str, str] = None) -> Dict[str, any]:
    """
    Create IAM role for EKS cluster

    Args:
        name: Resource name prefix
        tags: Additional tags

    Returns:
        Dict with role resource and outputs
    """
    tags = tags or {}

    role = aws.iam.Role(
        f"{name}-cluster-role",
        assume_role_policy=assume_role_policy("eks.amazonaws.com"),
        tags={
            **tags,
            "Name": f"{name}-cluster-role",
        }
    )

    policy_attachment = aws.iam.RolePolicyAttachment(
        f"{name}-cluster-policy",
        policy_arn="arn:aws:iam::aws:policy/AmazonEKSClusterPolicy",
        role=role.name
    )

    return {
        "role": role,
        "policy_attachment": policy_attachment,
        "role_arn": role.arn,
        "role_name": role.name,
    }


def create_node_role(name: str, tags: Dict[str, str] = None) -> Dict[str, any]:
    """
    Create IAM role for EKS worker nodes

    Args:
        name: Resource name prefix
        tags: Additional tags

    Returns:
        Dict with role resource, every policy attachment and outputs
    """
    tags = tags or {}

    role = aws.iam.Role(
        f"{name}-worker-role",
        assume_role_policy=assume_role_policy("ec2.amazonaws.com"),
        tags={
            **tags,
            "Name": f"{name}-worker-role",
        }
    )

    # All three are needed before a node can join the cluster
    policy_attachments = [
        aws.iam.RolePolicyAttachment(
            f"{name}-worker-{policy}-policy",
            policy_arn=policy_arn,
            role=role.name
        )
        for policy, policy_arn in NODE_POLICY_ARNS.items()
    ]

    return {
        "role": role,
        "policy_attachments": policy_attachments,
        "role_arn": role.arn,
        "role_name": role.name,
    }
