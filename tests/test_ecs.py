import socket

from xraykit import plugins
from xraykit.awsplugins import ecs


def test_add_plugin_metadata_records_hostname():
    metadata = plugins.PluginMetadata()
    ecs.add_plugin_metadata(metadata)
    assert metadata.ecs_metadata == plugins.ECSMetadata(
        container_name=socket.gethostname()
    )
    assert metadata.origin == "AWS::ECS::Container"


def test_add_plugin_metadata_keeps_other_metadata():
    ec2_metadata = plugins.EC2Metadata(instance_id="i-1", availability_zone="zone")
    metadata = plugins.PluginMetadata(ec2_metadata=ec2_metadata)
    ecs.add_plugin_metadata(metadata)
    assert metadata.ec2_metadata is ec2_metadata
    assert metadata.ecs_metadata.container_name == socket.gethostname()


def test_init_fills_instance_metadata(monkeypatch):
    instance = plugins.PluginMetadata()
    monkeypatch.setattr(plugins, "instance_plugin_metadata", instance)
    ecs.init()
    assert instance.ecs_metadata == plugins.ECSMetadata(
        container_name=socket.gethostname()
    )
    assert instance.origin == ecs.ORIGIN


def test_init_keeps_existing_metadata(monkeypatch):
    existing = plugins.ECSMetadata(container_name="existing")
    instance = plugins.PluginMetadata(ecs_metadata=existing)
    monkeypatch.setattr(plugins, "instance_plugin_metadata", instance)
    ecs.init()
    assert instance.ecs_metadata is existing
    assert instance.origin == ""