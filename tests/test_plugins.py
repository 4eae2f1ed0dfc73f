import json

import pytest

from xraykit.plugins import (
    BeanstalkMetadata,
    EC2Metadata,
    ECSMetadata,
    PluginMetadata,
)


def test_plugin_metadata_defaults_empty():
    metadata = PluginMetadata()
    assert metadata.ec2_metadata is None
    assert metadata.beanstalk_metadata is None
    assert metadata.ecs_metadata is None
    assert metadata.origin == ""


def test_beanstalk_from_json_reads_fields():
    raw = '{"environment_name": "env", "version_label": "v1", "deployment_id": 3}'
    metadata = BeanstalkMetadata.from_json(raw)
    assert metadata == BeanstalkMetadata("env", "v1", 3)


def test_beanstalk_from_json_accepts_bytes():
    raw = b'{"environment_name": "env"}'
    metadata = BeanstalkMetadata.from_json(raw)
    assert metadata.environment == "env"
    assert metadata.deployment_id == 0


def test_beanstalk_round_trip():
    original = BeanstalkMetadata("env", "v1", 3)
    assert BeanstalkMetadata.from_json(json.dumps(original.to_dict())) == original


def test_beanstalk_keys_case_insensitive_and_unknown_ignored():
    raw = '{"Environment_Name": "env", "other": 1}'
    metadata = BeanstalkMetadata.from_json(raw)
    assert metadata.environment == "env"
    assert metadata.version_label == ""


def test_beanstalk_null_document_gives_defaults():
    assert BeanstalkMetadata.from_json("null") == BeanstalkMetadata()


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[1, 2]",
        '{"deployment_id": "3"}',
        '{"deployment_id": 1.5}',
        '{"deployment_id": true}',
        '{"environment_name": 7}',
    ],
)
def test_beanstalk_invalid_documents(raw):
    with pytest.raises(ValueError):
        BeanstalkMetadata.from_json(raw)


def test_ec2_to_dict_keys():
    metadata = EC2Metadata(instance_id="i-1", availability_zone="zone")
    assert metadata.to_dict() == {"instance_id": "i-1", "availability_zone": "zone"}


def test_ecs_to_dict_key():
    assert ECSMetadata(container_name="box").to_dict() == {"container": "box"}