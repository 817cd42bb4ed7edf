"""
Configuration management for the GitOps platform stacks
One settings class per stack, loaded from Pulumi stack configuration
"""

import pulumi
from typing import Dict, Optional, Union

DEFAULT_AWS_REGION = "us-east-1"
DEFAULT_KARGO_HOSTNAME = "kargo.example.com"

Secret = Union[str, pulumi.Output]


def _aws_region() -> str:
    return pulumi.Config("aws").get("region") or DEFAULT_AWS_REGION


class ClusterConfig:
    """Settings for the cluster stack (network, IAM, EKS)"""

    def __init__(self,
                 aws_region: str = DEFAULT_AWS_REGION,
                 cluster_name: Optional[str] = None,
                 vpc_cidr: str = "10.0.0.0/16",
                 subnet_cidrs=None,
                 node_instance_type: str = "t3.medium",
                 node_desired_size: int = 2,
                 node_min_size: int = 1,
                 node_max_size: int = 3,
                 additional_tags: Dict[str, str] = None):
        self.aws_region = aws_region
        self.cluster_name = cluster_name
        self.vpc_cidr = vpc_cidr
        self.subnet_cidrs = subnet_cidrs or ["10.0.1.0/24", "10.0.2.0/24"]
        self.node_instance_type = node_instance_type
        self.node_desired_size = node_desired_size
        self.node_min_size = node_min_size
        self.node_max_size = node_max_size
        self.additional_tags = additional_tags or {}

    @classmethod
    def from_pulumi(cls) -> "ClusterConfig":
        config = pulumi.Config()
        return cls(
            aws_region=_aws_region(),
            cluster_name=config.get("clusterName"),
            vpc_cidr=config.get("vpcCidr") or "10.0.0.0/16",
            subnet_cidrs=config.get_object("subnetCidrs"),
            node_instance_type=config.get("nodeInstanceType") or "t3.medium",
            node_desired_size=config.get_int("nodeDesiredSize") or 2,
            node_min_size=config.get_int("nodeMinSize") or 1,
            node_max_size=config.get_int("nodeMaxSize") or 3,
            additional_tags=config.get_object("tags"),
        )

    @property
    def availability_zones(self):
        """Two zones in the configured region, one per public subnet"""
        return [f"{self.aws_region}a", f"{self.aws_region}b"]

    @property
    def common_tags(self) -> Dict[str, str]:
        """Get common tags for all AWS resources"""
        base_tags = {
            "ManagedBy": "pulumi",
            "Project": "gitops-platform",
        }
        base_tags.update(self.additional_tags)
        return base_tags


class PrerequisitesConfig:
    """Settings for the prerequisites stack (operators, identity, GitOps wiring)"""

    def __init__(self,
                 cluster_stack: str,
                 pulumi_api_token: Secret,
                 aws_access_key_id: Secret,
                 aws_secret_access_key: Secret,
                 stack_manifests_repo: str,
                 kargo_hostname: str = DEFAULT_KARGO_HOSTNAME,
                 aws_region: str = DEFAULT_AWS_REGION,
                 cognito_domain_prefix: Optional[str] = None):
        self.cluster_stack = cluster_stack
        self.pulumi_api_token = pulumi_api_token
        self.aws_access_key_id = aws_access_key_id
        self.aws_secret_access_key = aws_secret_access_key
        self.stack_manifests_repo = stack_manifests_repo
        self.kargo_hostname = kargo_hostname
        self.aws_region = aws_region
        # Cognito domain prefixes are unique per region
        self.cognito_domain_prefix = cognito_domain_prefix or f"kargo-{pulumi.get_stack()}"

    @classmethod
    def from_pulumi(cls) -> "PrerequisitesConfig":
        config = pulumi.Config()
        return cls(
            cluster_stack=config.require("clusterStack"),
            pulumi_api_token=config.require_secret("pulumiApiToken"),
            aws_access_key_id=config.require_secret("awsAccessKeyId"),
            aws_secret_access_key=config.require_secret("awsSecretAccessKey"),
            stack_manifests_repo=config.require("stackManifestsRepo"),
            kargo_hostname=config.get("kargoHostname") or DEFAULT_KARGO_HOSTNAME,
            aws_region=_aws_region(),
            cognito_domain_prefix=config.get("cognitoDomainPrefix"),
        )

    @property
    def kargo_callback_url(self) -> str:
        return f"https://{self.kargo_hostname}/login"


class KargoConfig:
    """Settings for the Kargo stack"""

    def __init__(self,
                 prereqs_stack: str,
                 admin_password_hash: Secret,
                 token_signing_key: Secret,
                 kargo_hostname: str = DEFAULT_KARGO_HOSTNAME):
        self.prereqs_stack = prereqs_stack
        self.admin_password_hash = admin_password_hash
        self.token_signing_key = token_signing_key
        self.kargo_hostname = kargo_hostname

    @classmethod
    def from_pulumi(cls) -> "KargoConfig":
        config = pulumi.Config()
        return cls(
            prereqs_stack=config.require("prereqsStack"),
            admin_password_hash=config.require_secret("kargoAdminPasswordHash"),
            token_signing_key=config.require_secret("kargoTokenSigningKey"),
            kargo_hostname=config.get("kargoHostname") or DEFAULT_KARGO_HOSTNAME,
        )
