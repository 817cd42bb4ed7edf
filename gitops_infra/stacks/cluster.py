"""
Cluster stack
Network and compute substrate; publishes the kubeconfig for the next stage
"""

from typing import Any, Dict

from ..config import ClusterConfig
from ..eks import create_cluster, create_node_group
from ..iam import create_cluster_role, create_node_role
from ..vpc import create_public_route_table, create_public_subnets, create_security_groups, create_vpc

NAME = "eks"


def deploy(settings: ClusterConfig) -> Dict[str, Any]:
    """Declare the cluster stack and return its outputs keyed by export name"""
    tags = settings.common_tags

    network = create_vpc(NAME, settings.vpc_cidr, tags=tags)
    subnets = create_public_subnets(
        NAME, network["vpc_id"], settings.subnet_cidrs, settings.availability_zones, tags=tags)
    create_public_route_table(
        NAME, network["vpc_id"], network["igw_id"], subnets["subnets"], tags=tags)
    security_groups = create_security_groups(NAME, network["vpc_id"], tags=tags)

    cluster_role = create_cluster_role(NAME, tags=tags)
    node_role = create_node_role(NAME, tags=tags)

    cluster = create_cluster(
        NAME,
        cluster_role_arn=cluster_role["role_arn"],
        subnet_ids=subnets["subnet_ids"],
        cluster_security_group_id=security_groups["cluster_security_group_id"],
        depends_on=[cluster_role["policy_attachment"]],
        cluster_name=settings.cluster_name,
        tags=tags,
    )

    node_group = create_node_group(
        NAME,
        cluster_name=cluster["cluster_name"],
        node_role_arn=node_role["role_arn"],
        subnet_ids=subnets["subnet_ids"],
        policy_attachments=node_role["policy_attachments"],
        instance_type=settings.node_instance_type,
        desired_size=settings.node_desired_size,
        min_size=settings.node_min_size,
        max_size=settings.node_max_size,
        tags=tags,
    )

    return {
        "kubeconfig": cluster["kubeconfig"],
        "clusterName": cluster["cluster_name"],
        "clusterEndpoint": cluster["cluster_endpoint"],
        "nodeGroupStatus": node_group["node_group_status"],
        "vpcId": network["vpc_id"],
        "subnetIds": subnets["subnet_ids"],
    }
