"""Resolution of the UDP and TCP endpoints of the tracing daemon.

The address comes from the ``AWS_XRAY_DAEMON_ADDRESS`` environment variable
or, failing that, from a caller-supplied string.  Accepted notations:

* ``127.0.0.1:2000`` or ``hostname:2000``: UDP and TCP share one address;
* ``tcp:127.0.0.1:2000 udp:127.0.0.2:2001`` (in either order): separate
  addresses for each protocol.

With neither set, the daemon is assumed at ``127.0.0.1:2000`` for both.
"""

from __future__ import annotations

import os
import re
import socket
from dataclasses import dataclass
from typing import NamedTuple

from xraykit import logger

ENV_DAEMON_ADDRESS = "AWS_XRAY_DAEMON_ADDRESS"

_ADDRESS_DELIMITER = " "
_UDP_KEY = "udp"
_TCP_KEY = "tcp"

_INVALID_ADDRESS = "invalid daemon address"
_INVALID_PORT = "invalid daemon address port"

_SIGNED_INTEGER = re.compile(r"[+-]?[0-9]+")
_PORT_NUMBER = re.compile(r"[0-9]+")
_MAX_PORT = 65535


class DaemonAddressError(ValueError):
    """Raised when a daemon address cannot be parsed or resolved."""


class Address(NamedTuple):
    """A resolved IP address and port."""

    ip: str
    port: int

    def __str__(self) -> str:
        host = f"[{self.ip}]" if ":" in self.ip else self.ip
        return f"{host}:{self.port}"


@dataclass(frozen=True)
class DaemonEndpoints:
    """The UDP endpoint for emitting segments and the TCP endpoint for sampling calls."""

    udp_addr: Address
    tcp_addr: Address


def get_daemon_endpoints() -> DaemonEndpoints:
    """Return the endpoints from the environment, or the defaults if it is unset.

    Raises :class:`DaemonAddressError` if the environment variable is invalid.
    """
    endpoints = get_daemon_endpoints_from_string("")
    if endpoints is None:
        return get_default_daemon_endpoints()
    return endpoints


def get_daemon_endpoints_from_env() -> DaemonEndpoints | None:
    """Resolve the address in the environment variable, or return None if unset."""
    env_address = os.environ.get(ENV_DAEMON_ADDRESS, "")
    if env_address:
        return _resolve_address(env_address)
    return None


def get_default_daemon_endpoints() -> DaemonEndpoints:
    """Return the default endpoints: 127.0.0.1:2000 for both UDP and TCP."""
    default = Address("127.0.0.1", 2000)
    return DaemonEndpoints(udp_addr=default, tcp_addr=default)


def get_daemon_endpoints_from_string(address: str) -> DaemonEndpoints | None:
    """Resolve the endpoints, preferring the environment variable over ``address``.

    Returns None when neither is set.
    """
    env_address = os.environ.get(ENV_DAEMON_ADDRESS, "")
    if env_address:
        logger.infof(
            "using daemon endpoints from environment variable "
            "AWS_XRAY_DAEMON_ADDRESS: %s",
            env_address,
        )
        daemon_address = env_address
    else:
        daemon_address = address
    if daemon_address:
        return _resolve_address(daemon_address)
    return None


def _resolve_address(address: str) -> DaemonEndpoints:
    parts = address.split(_ADDRESS_DELIMITER)
    if len(parts) == 1:
        return _parse_single_form(parts[0])
    if len(parts) == 2:
        return _parse_double_form(parts[0], parts[1])
    raise DaemonAddressError(f"{_INVALID_ADDRESS}: {address}")


def _parse_double_form(first: str, second: str) -> DaemonEndpoints:
    first_parts = first.split(":")
    second_parts = second.split(":")
    if len(first_parts) != 3 or len(second_parts) != 3:
        raise DaemonAddressError(f"{_INVALID_ADDRESS}: {first} {second}")

    if not all(_SIGNED_INTEGER.fullmatch(p[2]) for p in (first_parts, second_parts)):
        raise DaemonAddressError(_INVALID_PORT)

    by_protocol = {
        protocol: f"{host}:{port}"
        for protocol, host, port in (first_parts, second_parts)
    }
    udp = by_protocol.get(_UDP_KEY)
    tcp = by_protocol.get(_TCP_KEY)
    if not udp or not tcp:
        raise DaemonAddressError(_INVALID_ADDRESS)

    return DaemonEndpoints(
        udp_addr=_resolve(udp, socket.SOCK_DGRAM),
        tcp_addr=_resolve(tcp, socket.SOCK_STREAM),
    )


def _parse_single_form(address: str) -> DaemonEndpoints:
    parts = address.split(":")
    if len(parts) != 2:
        raise DaemonAddressError(f"{_INVALID_ADDRESS}: {address}")
    if not _SIGNED_INTEGER.fullmatch(parts[1]):
        raise DaemonAddressError(_INVALID_PORT)
    return DaemonEndpoints(
        udp_addr=_resolve(address, socket.SOCK_DGRAM),
        tcp_addr=_resolve(address, socket.SOCK_STREAM),
    )


def _resolve(address: str, socktype: int) -> Address:
    host, _, port_text = address.rpartition(":")
    if not _PORT_NUMBER.fullmatch(port_text) or int(port_text) > _MAX_PORT:
        raise DaemonAddressError(f"cannot resolve {address}: invalid port")
    port = int(port_text)
    if not host:
        return Address("", port)
    try:
        candidates = socket.getaddrinfo(host, port, socket.AF_UNSPEC, socktype)
    except (OSError, UnicodeError) as exc:
        raise DaemonAddressError(f"cannot resolve {address}: {exc}") from exc
    if not candidates:
        raise DaemonAddressError(f"cannot resolve {address}: no addresses found")
    ipv4 = [c for c in candidates if c[0] == socket.AF_INET]
    chosen = (ipv4 or candidates)[0]
    return Address(chosen[4][0], port)