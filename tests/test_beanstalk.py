import json

import pytest

from xraykit import plugins
from xraykit.awsplugins import beanstalk


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "environment.conf"
    path.write_text(
        json.dumps(
            {
                "environment_name": "env",
                "version_label": "v1",
                "deployment_id": 3,
            }
        )
    )
    return path


@pytest.fixture
def fresh_instance(monkeypatch):
    metadata = plugins.PluginMetadata()
    monkeypatch.setattr(plugins, "instance_plugin_metadata", metadata)
    return metadata


def test_reads_configuration_file(config_file):
    metadata = plugins.PluginMetadata()
    beanstalk.add_plugin_metadata(metadata, config_file)
    assert metadata.beanstalk_metadata == plugins.BeanstalkMetadata("env", "v1", 3)
    assert metadata.origin == beanstalk.ORIGIN
    assert metadata.origin == "AWS::ElasticBeanstalk::Environment"


def test_missing_file_leaves_metadata_untouched(tmp_path):
    metadata = plugins.PluginMetadata()
    beanstalk.add_plugin_metadata(metadata, tmp_path / "absent.conf")
    assert metadata.beanstalk_metadata is None
    assert metadata.origin == ""


def test_invalid_json_leaves_metadata_untouched(tmp_path):
    path = tmp_path / "environment.conf"
    path.write_text("{not json")
    metadata = plugins.PluginMetadata()
    beanstalk.add_plugin_metadata(metadata, path)
    assert metadata.beanstalk_metadata is None
    assert metadata.origin == ""


def test_wrong_field_type_leaves_metadata_untouched(tmp_path):
    path = tmp_path / "environment.conf"
    path.write_text(json.dumps({"deployment_id": "three"}))
    metadata = plugins.PluginMetadata()
    beanstalk.add_plugin_metadata(metadata, path)
    assert metadata.beanstalk_metadata is None
    assert metadata.origin == ""


def test_init_uses_configured_path(monkeypatch, config_file, fresh_instance):
    monkeypatch.setattr(beanstalk, "CONFIG_PATH", str(config_file))
    beanstalk.init()
    assert fresh_instance.beanstalk_metadata == plugins.BeanstalkMetadata("env", "v1", 3)
    assert fresh_instance.origin == beanstalk.ORIGIN


def test_init_keeps_existing_metadata(monkeypatch, config_file, fresh_instance):
    existing = plugins.BeanstalkMetadata("old", "v0", 1)
    fresh_instance.beanstalk_metadata = existing
    monkeypatch.setattr(beanstalk, "CONFIG_PATH", str(config_file))
    beanstalk.init()
    assert fresh_instance.beanstalk_metadata is existing
    assert fresh_instance.origin == ""