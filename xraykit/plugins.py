"""Metadata about the AWS infrastructure that hosts the traced application."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union

EB_SERVICE_NAME = "elastic_beanstalk"
EC2_SERVICE_NAME = "ec2"
ECS_SERVICE_NAME = "ecs"


@dataclass
class EC2Metadata:
    """The EC2 instance ID and availability zone."""

    instance_id: str = ""
    availability_zone: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "instance_id": self.instance_id,
            "availability_zone": self.availability_zone,
        }


@dataclass
class ECSMetadata:
    """The ECS container name."""

    container_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"container": self.container_name}


@dataclass
class BeanstalkMetadata:
    """The Elastic Beanstalk environment name, version label and deployment ID."""

    environment: str = ""
    version_label: str = ""
    deployment_id: int = 0

    _FIELDS = {
        "environment_name": ("environment", str),
        "version_label": ("version_label", str),
        "deployment_id": ("deployment_id", int),
    }

    @classmethod
    def from_json(cls, raw: Union[str, bytes]) -> "BeanstalkMetadata":
        """Build from a JSON document; raise ValueError if it does not fit the shape.

        Keys match their field names case-insensitively, unknown keys are
        ignored and nulls leave the default in place.
        """
        try:
            document = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValueError(f"invalid JSON: {exc}") from exc

        result = cls()
        if document is None:
            return result
        if not isinstance(document, dict):
            raise ValueError("expected a JSON object")

        for key, value in document.items():
            spec = cls._FIELDS.get(key.lower())
            if spec is None or value is None:
                continue
            attribute, kind = spec
            if isinstance(value, bool) or not isinstance(value, kind):
                raise ValueError(f"field {key!r} must be of type {kind.__name__}")
            setattr(result, attribute, value)
        return result

    def to_dict(self) -> dict[str, Any]:
        return {
            "environment_name": self.environment,
            "version_label": self.version_label,
            "deployment_id": self.deployment_id,
        }


@dataclass
class PluginMetadata:
    """Information collected by the platform plugins."""

    ec2_metadata: EC2Metadata | None = None
    beanstalk_metadata: BeanstalkMetadata | None = None
    ecs_metadata: ECSMetadata | None = None
    origin: str = ""


instance_plugin_metadata = PluginMetadata()