"""Plugin that records EC2 instance metadata from the instance metadata service."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from typing import Mapping

from xraykit import logger, plugins

ORIGIN = "AWS::EC2::Instance"

IMDS_URL = "http://169.254.169.254/latest/"

_TTL_HEADER = "X-aws-ec2-metadata-token-ttl-seconds"
_DEFAULT_TTL = "60"
_TOKEN_HEADER = "X-aws-ec2-metadata-token"

# Fields of the identity document that must hold strings when present.
_STRING_FIELDS = ("availabilityzone", "imageid", "instanceid", "instancetype")

# The metadata service is link-local and must never be reached through a proxy.
_opener = urllib.request.build_opener(urllib.request.ProxyHandler({}))


def _fetch(method: str, url: str, headers: Mapping[str, str]) -> bytes:
    """Send a request and return the response body, whatever its status."""
    try:
        request = urllib.request.Request(url, method=method, headers=dict(headers))
        with _opener.open(request) as response:
            return response.read()
    except urllib.error.HTTPError as exc:
        with exc:
            return exc.read()
    except ValueError as exc:
        raise urllib.error.URLError(str(exc)) from exc


def init() -> None:
    """Record EC2 metadata unless it has already been recorded."""
    metadata = plugins.instance_plugin_metadata
    if metadata is not None and metadata.ec2_metadata is None:
        add_plugin_metadata(metadata, IMDS_URL)


def get_token(imds_url: str) -> str:
    """Fetch a session token for the metadata service; raise OSError on failure."""
    body = _fetch("PUT", imds_url + "api/token", {_TTL_HEADER: _DEFAULT_TTL})
    return body.decode("utf-8", errors="replace")


def get_metadata(imds_url: str, token: str) -> bytes:
    """Fetch the instance identity document; raise OSError on failure.

    The token is sent only when it is not empty.
    """
    headers = {_TOKEN_HEADER: token} if token else {}
    return _fetch("GET", imds_url + "dynamic/instance-identity/document", headers)


def _parse_document(raw: bytes) -> dict[str, str]:
    document = json.loads(raw)
    fields = {name: "" for name in _STRING_FIELDS}
    if document is None:
        return fields
    if not isinstance(document, dict):
        raise ValueError("expected a JSON object")
    for key, value in document.items():
        name = key.lower()
        if name not in fields or value is None:
            continue
        if not isinstance(value, str):
            raise ValueError(f"field {key!r} must be a string")
        fields[name] = value
    return fields


def add_plugin_metadata(
    plugin_metadata: plugins.PluginMetadata, imds_url: str = IMDS_URL
) -> None:
    """Query the metadata service and record the instance ID and zone.

    Falls back to unauthenticated requests when no token can be obtained.
    Failures are logged and leave ``plugin_metadata`` untouched.
    """
    try:
        token = get_token(imds_url)
    except OSError as exc:
        logger.debugf(
            "Unable to fetch EC2 instance metadata token fallback to IMDS V1: %s",
            exc,
        )
        token = ""

    try:
        raw = get_metadata(imds_url, token)
    except OSError as exc:
        logger.errorf("Unable to read EC2 instance metadata: %s", exc)
        return

    try:
        fields = _parse_document(raw)
    except ValueError as exc:
        logger.errorf("Error while unmarshal operation: %s", exc)
        return

    plugin_metadata.ec2_metadata = plugins.EC2Metadata(
        instance_id=fields["instanceid"],
        availability_zone=fields["availabilityzone"],
    )
    plugin_metadata.origin = ORIGIN