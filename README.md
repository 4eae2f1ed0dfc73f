# xraykit

Small, dependency-free building blocks for applications that report traces to a
tracing daemon:

- **`xraykit.header`**: parse and render the `X-Amzn-Trace-Id` header value
  (`Root=...;Parent=...;Sampled=1;Key=value`).
- **`xraykit.daemon_config`**: work out the daemon's UDP and TCP endpoints from
  the `AWS_XRAY_DAEMON_ADDRESS` environment variable or from an address string.
- **`xraykit.pattern`**: `*` / `?` wildcard matching.
- **`xraykit.plugins`** and **`xraykit.awsplugins`**: describe the host the
  application runs on (EC2, ECS, Elastic Beanstalk).
- **`xraykit.logger`**: the levelled logging helpers the rest of the package uses.

## Installation

```
pip install xraykit
```

Python 3.10 or later is required. The package has no third-party dependencies.
The tests use pytest (`pip install xraykit[test]`).

## Trace headers

```python
from xraykit.header import Header, SamplingDecision, from_string

h = from_string("Root=1-57ff426a-80c11c39b0c928905eb0828d;Parent=foo;Sampled=1;Foo=bar")
h.trace_id            # '1-57ff426a-80c11c39b0c928905eb0828d'
h.parent_id           # 'foo'
h.sampling_decision   # SamplingDecision.SAMPLED
h.additional_data     # {'Foo': 'bar'}

str(h)                # 'Root=1-57ff...;Parent=foo;Sampled=1;Foo=bar'
```

Whitespace around each `;`-separated part is ignored, parts without `=` are
skipped and `Self=` entries are dropped. `SamplingDecision` has the members
`SAMPLED` (`Sampled=1`), `NOT_SAMPLED` (`Sampled=0`), `REQUESTED` (`Sampled=?`)
and `UNKNOWN` (empty); any other `Sampled=` value parses as `UNKNOWN`.

When rendering, `Root` and `Parent` are written only if set, followed by the
sampling decision and then the additional data in insertion order.

## Daemon endpoints

An address may take either of two forms:

- `host:port`: UDP and TCP share one address, e.g. `127.0.0.1:2000`
- `tcp:host:port udp:host:port` (either order), e.g.
  `tcp:127.0.0.1:2000 udp:127.0.0.2:2001`

```python
from xraykit.daemon_config import (
    DaemonAddressError,
    get_daemon_endpoints,
    get_daemon_endpoints_from_env,
    get_daemon_endpoints_from_string,
    get_default_daemon_endpoints,
)

endpoints = get_daemon_endpoints()   # from the environment, or 127.0.0.1:2000
endpoints.udp_addr                   # Address(ip='127.0.0.1', port=2000)
str(endpoints.tcp_addr)              # '127.0.0.1:2000'

try:
    get_daemon_endpoints_from_string("tcp:localhost:2000 tcp:localhost:2000")
except DaemonAddressError as exc:
    print(exc)                       # invalid daemon address
```

- `AWS_XRAY_DAEMON_ADDRESS` takes precedence over any address passed to
  `get_daemon_endpoints_from_string`, which returns `None` when neither is set.
- `get_daemon_endpoints_from_env` looks only at the environment variable.
- `get_default_daemon_endpoints` always returns `127.0.0.1:2000` for both.
- Host names are resolved, with IPv4 addresses preferred. A malformed address,
  a bad port or a name that cannot be resolved raises `DaemonAddressError`
  (a `ValueError`). `get_daemon_endpoints` raises it too when the environment
  variable holds an invalid address.

## Wildcard patterns

```python
from xraykit.pattern import wildcard_match, wildcard_match_case_insensitive

wildcard_match_case_insensitive("*/foo", "/bar/foo")   # True
wildcard_match("Fo?", "FOo", False)                    # False
wildcard_match("Fo?", "FOO", True)                     # True
```

`*` matches zero or more characters and `?` exactly one. An empty pattern
matches only empty text.

## Host metadata plugins

```python
from xraykit import plugins
from xraykit.awsplugins import beanstalk, ec2, ecs

ecs.init()        # records the host name as the container name
ec2.init()        # queries the instance metadata service (token first, then without)
beanstalk.init()  # reads /var/elasticbeanstalk/xray/environment.conf

plugins.instance_plugin_metadata.origin   # e.g. 'AWS::ECS::Container'
```

Each `init()` fills in the shared `plugins.instance_plugin_metadata` (a
`PluginMetadata`) only if its own part is still empty, and sets `origin`.
To fill in a `PluginMetadata` of your own, or to point at another source, call
the plugin's `add_plugin_metadata` directly:

- `beanstalk.add_plugin_metadata(metadata, config_path)`
- `ec2.add_plugin_metadata(metadata, imds_url)`; the lower-level
  `ec2.get_token(imds_url)` and `ec2.get_metadata(imds_url, token)` return the
  token text and the raw identity document, and raise `OSError` when the
  service cannot be reached
- `ecs.add_plugin_metadata(metadata)`

When a plugin cannot reach or parse its data, it logs the failure and leaves
the metadata unchanged. `BeanstalkMetadata.from_json` parses an environment
configuration document and raises `ValueError` if it does not fit.

## Logging

```python
import logging
from xraykit import logger

logger.infof("daemon at %s", "127.0.0.1:2000")
logger.debug_deferred(lambda: "costly message")   # built only if debug is enabled

previous = logger.set_logger(logging.getLogger("myapp"))
```

By default messages go to standard output at `INFO` level and above, as
`<time> [LEVEL] message`. The `*f` functions use `%`-style formatting; messages
are built only when the active logger emits them. `set_logger` accepts any
object with a `log(level, message)` method and returns the logger it replaced;
`get_logger` returns the current one.

## What the package does not do

xraykit does not record segments, send anything to the daemon, make sampling
decisions or instrument HTTP clients and servers. It supplies the pieces such
code needs: the trace header, the daemon endpoints, wildcard matching and host
metadata.