"""
VPC Module Functions
Creates VPC, public subnets, routing and security groups for EKS
"""

import pulumi
import pulumi_aws as aws
from typing import Any, Dict, List


def create_vpc(name: str, cidr: str, tags: Dict[str, str] = None) -> Dict[str, Any]:
    """
    Create VPC with DNS settings and its Internet Gateway

    Args:
        name: Resource name prefix
        cidr: VPC CIDR block
        tags: Additional tags

    Returns:
        Dict with vpc and igw resources and outputs
    """
    tags = tags or {}

    vpc = aws.ec2.Vpc(
        f"{name}-vpc",
        cidr_block=cidr,
        enable_dns_hostnames=True,
        enable_dns_support=True,
        tags={
            **tags,
            "Name": f"{name}-vpc",
        }
    )

    igw = aws.ec2.InternetGateway(
        f"{name}-igw",
        vpc_id=vpc.id,
        tags={
            **tags,
            "Name": f"{name}-igw",
        }
    )

    return {
        "vpc": vpc,
        "igw": igw,
        "vpc_id": vpc.id,
        "igw_id": igw.id,
    }


def create_public_subnets(name: str, vpc_id: pulumi.Output[str], subnet_cidrs: List[str],
                          availability_zones: List[str], tags: Dict[str, str] = None) -> Dict[str, Any]:
    """
    Create public subnets for EKS, one per availability zone

    Args:
        name: Resource name prefix
        vpc_id: VPC ID
        subnet_cidrs: List of CIDR blocks for subnets
        availability_zones: List of availability zones
        tags: Additional tags

    Returns:
        Dict with subnet resources and outputs
    """
    tags = tags or {}

    subnets = []
    for i, (cidr, zone) in enumerate(zip(subnet_cidrs, availability_zones)):
        subnet = aws.ec2.Subnet(
            f"{name}-subnet-{i+1}",
            vpc_id=vpc_id,
            cidr_block=cidr,
            availability_zone=zone,
            map_public_ip_on_launch=True,
            tags={
                **tags,
                "Name": f"{name}-subnet-{i+1}",
                # Lets the AWS cloud provider place internet-facing load balancers
                "kubernetes.io/role/elb": "1",
            }
        )
        subnets.append(subnet)

    return {
        "subnets": subnets,
        "subnet_ids": [subnet.id for subnet in subnets],
    }


def create_public_route_table(name: str, vpc_id: pulumi.Output[str], igw_id: pulumi.Output[str],
                              subnets: List[aws.ec2.Subnet], tags: Dict[str, str] = None) -> Dict[str, Any]:
    """
    Create route table with a default route and associate the public subnets

    Args:
        name: Resource name prefix
        vpc_id: VPC ID
        igw_id: Internet Gateway ID
        subnets: Subnets to associate
        tags: Additional tags

    Returns:
        Dict with route table resources and outputs
    """
    tags = tags or {}

    route_table = aws.ec2.RouteTable(
        f"{name}-route-table",
        vpc_id=vpc_id,
        routes=[aws.ec2.RouteTableRouteArgs(
            cidr_block="0.0.0.0/0",
            gateway_id=igw_id,
        )],
        tags={
            **tags,
            "Name": f"{name}-route-table",
        }
    )

    associations = []
    for i, subnet in enumerate(subnets):
        association = aws.ec2.RouteTableAssociation(
            f"{name}-route-table-association-{i+1}",
            subnet_id=subnet.id,
            route_table_id=route_table.id,
            opts=pulumi.ResourceOptions(depends_on=[subnet, route_table])
        )
        associations.append(association)

    return {
        "route_table": route_table,
        "associations": associations,
        "route_table_id": route_table.id,
    }


def create_security_groups(name: str, vpc_id: pulumi.Output[str], tags: Dict[str, str] = None) -> Dict[str, Any]:
    """
    Create cluster and node security groups with the rules EKS needs

    Args:
        name: Resource name prefix
        vpc_id: VPC ID
        tags: Additional tags

    Returns:
        Dict with security group resources and outputs
    """
    tags = tags or {}
    all_egress = [aws.ec2.SecurityGroupEgressArgs(
        protocol="-1",
        from_port=0,
        to_port=0,
        cidr_blocks=["0.0.0.0/0"],
    )]

    cluster_sg = aws.ec2.SecurityGroup(
        f"{name}-cluster-sg",
        vpc_id=vpc_id,
        description="EKS cluster security group",
        egress=all_egress,
        tags={
            **tags,
            "Name": f"{name}-cluster-sg",
        }
    )

    node_sg = aws.ec2.SecurityGroup(
        f"{name}-node-sg",
        vpc_id=vpc_id,
        description="Security group for EKS worker nodes",
        egress=all_egress,
        tags={
            **tags,
            "Name": f"{name}-node-sg",
        }
    )

    rules = [
        aws.ec2.SecurityGroupRule(
            f"{name}-node-to-cluster",
            type="ingress",
            from_port=443,
            to_port=443,
            protocol="tcp",
            security_group_id=cluster_sg.id,
            source_security_group_id=node_sg.id,
            description="Allow nodes to communicate with cluster API"
        ),
        aws.ec2.SecurityGroupRule(
            f"{name}-cluster-to-node",
            type="ingress",
            from_port=1025,
            to_port=65535,
            protocol="tcp",
            security_group_id=node_sg.id,
            source_security_group_id=cluster_sg.id,
            description="Allow cluster to communicate with nodes"
        ),
        aws.ec2.SecurityGroupRule(
            f"{name}-node-to-node",
            type="ingress",
            from_port=0,
            to_port=65535,
            protocol="-1",
            security_group_id=node_sg.id,
            source_security_group_id=node_sg.id,
            description="Allow nodes to communicate with each other"
        ),
    ]

    return {
        "cluster_security_group": cluster_sg,
        "node_security_group": node_sg,
        "rules": rules,
        "cluster_security_group_id": cluster_sg.id,
        "node_security_group_id": node_sg.id,
    }
