"""Plugin that records Elastic Beanstalk environment metadata."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from xraykit import logger, plugins

ORIGIN = "AWS::ElasticBeanstalk::Environment"

CONFIG_PATH = "/var/elasticbeanstalk/xray/environment.conf"


def init() -> None:
    """Record Elastic Beanstalk metadata unless it has already been recorded."""
    metadata = plugins.instance_plugin_metadata
    if metadata is not None and metadata.beanstalk_metadata is None:
        add_plugin_metadata(metadata, CONFIG_PATH)


def add_plugin_metadata(
    plugin_metadata: plugins.PluginMetadata,
    config_path: Union[str, "os.PathLike[str]"] = CONFIG_PATH,
) -> None:
    """Read the environment configuration file into ``plugin_metadata``.

    Failures are logged and leave ``plugin_metadata`` untouched.
    """
    try:
        raw_config = Path(config_path).read_bytes()
    except OSError as exc:
        logger.errorf(
            "Unable to read Elastic Beanstalk configuration file %s: %s",
            config_path,
            exc,
        )
        return

    try:
        config = plugins.BeanstalkMetadata.from_json(raw_config)
    except ValueError as exc:
        logger.errorf(
            "Unable to unmarshal Elastic Beanstalk configuration file %s: %s",
            config_path,
            exc,
        )
        return

    plugin_metadata.beanstalk_metadata = config
    plugin_metadata.origin = ORIGIN