"""Plugin that records the ECS container name."""

from __future__ import annotations

import socket

from xraykit import logger, plugins

ORIGIN = "AWS::ECS::Container"


def init() -> None:
    """Record ECS metadata unless it has already been recorded."""
    metadata = plugins.instance_plugin_metadata
    if metadata is not None and metadata.ecs_metadata is None:
        add_plugin_metadata(metadata)


def add_plugin_metadata(plugin_metadata: plugins.PluginMetadata) -> None:
    """Record the host name as the container name in ``plugin_metadata``.

    Failures are logged and leave ``plugin_metadata`` untouched.
    """
    try:
        hostname = socket.gethostname()
    except OSError as exc:
        logger.errorf("Unable to retrieve hostname from OS. %s", exc)
        return

    plugin_metadata.ecs_metadata = plugins.ECSMetadata(container_name=hostname)
    plugin_metadata.origin = ORIGIN