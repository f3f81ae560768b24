"""Regions, services and API actions the signer knows how to address."""

from enum import Enum
from typing import Union


ECS_TARGET_PREFIX = 'AmazonEC2ContainerServiceV20141113'


class Region(Enum):
    US_EAST_1 = 'us-east-1'
    US_WEST_1 = 'us-west-1'
    US_WEST_2 = 'us-west-2'
    EU_WEST_1 = 'eu-west-1'
    EU_CENTRAL_1 = 'eu-central-1'
    AP_NORTHEAST_1 = 'ap-northeast-1'
    AP_SOUTHEAST_1 = 'ap-southeast-1'
    AP_SOUTHEAST_2 = 'ap-southeast-2'

    def __str__(self) -> str:
        return self.value


class Service(Enum):
    """Signing names of the services, as they appear in the credential scope."""

    ECS = 'ecs'
    IAM = 'iam'
    STS = 'sts'
    DYNAMODB = 'dynamodb'
    LAMBDA = 'lambda'
    EC2 = 'ec2'

    def __str__(self) -> str:
        return self.value


class EcsAction(Enum):
    LIST_CLUSTERS = 'ListClusters'

    @property
    def target(self) -> str:
        """Value of the X-Amz-Target header selecting this action."""
        return f'{ECS_TARGET_PREFIX}.{self.value}'

    def __str__(self) -> str:
        return self.value


def scope_name(value: Union[str, Region, Service]) -> str:
    """Return the credential-scope spelling of a region or service."""
    return value.value if isinstance(value, Enum) else value


def endpoint_host(service: Union[str, Service], region: Union[str, Region]) -> str:
    return f'{scope_name(service)}.{scope_name(region)}.amazonaws.com'
