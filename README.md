# fortiprobe

`fortiprobe` turns the decoded JSON returned by a FortiGate's monitor API
into Prometheus metrics. It covers IPsec tunnels, SSL VPN connections and
statistics, the web UI state (last reboot and snapshot times), Wi-Fi access
point status and Wi-Fi clients.

It has no runtime dependencies.

## Installation

```
pip install fortiprobe
```

## How it works

Each probe takes a client and some target metadata (not used by the current
probes; `None` will do) and returns a list of `Metric` objects. The client is
any object with the shape of the `FortiClient` protocol in
`fortiprobe.metrics`: a method `get(path, query)` that returns the decoded
JSON document for an API path and query string.

```python
from fortiprobe.metrics import render
from fortiprobe.vpn_ipsec import probe_vpn_ipsec
from fortiprobe.vpn_ssl import probe_vpn_ssl
from fortiprobe.vpn_ssl_stats import probe_vpn_ssl_stats
from fortiprobe.webui_state import probe_webui_state
from fortiprobe.wifi_ap_status import probe_wifi_ap_status
from fortiprobe.wifi_clients import probe_wifi_clients


class CannedClient:
    """Serves stored documents keyed by API path."""

    def __init__(self, documents):
        self.documents = documents

    def get(self, path, query):
        return self.documents[path]


client = CannedClient({
    "api/v2/monitor/vpn/ssl/stats": [
        {"vdom": "root",
         "results": {"current": {"users": 3, "tunnels": 2, "connections": 2}}},
    ],
})

print(render(probe_vpn_ssl_stats(client, None)))
```

`render` writes samples in the Prometheus text exposition format with
`# HELP` and `# TYPE` lines, families sorted by name and samples by label
values. It raises `ValueError` when two samples of a family carry the same
labels, or when samples of one family disagree on help text or type.

## Probes

| Function | API path | Metrics |
|---|---|---|
| `vpn_ipsec.probe_vpn_ipsec(client, meta)` | `api/v2/monitor/vpn/ipsec` | `fortigate_ipsec_tunnel_up`, `fortigate_ipsec_tunnel_transmit_bytes_total`, `fortigate_ipsec_tunnel_receive_bytes_total` |
| `vpn_ssl.probe_vpn_ssl(client, meta, max_vpn_users)` | `api/v2/monitor/vpn/ssl` | `fortigate_vpn_connections`, `fortigate_vpn_users` |
| `vpn_ssl_stats.probe_vpn_ssl_stats(client, meta)` | `api/v2/monitor/vpn/ssl/stats` | `fortigate_vpn_ssl_users`, `fortigate_vpn_ssl_tunnels`, `fortigate_vpn_ssl_connections` |
| `webui_state.probe_webui_state(client, meta)` | `api/v2/monitor/web-ui/state` | `fortigate_last_reboot_seconds`, `fortigate_last_snapshot_seconds` |
| `wifi_ap_status.probe_wifi_ap_status(client, meta)` | `api/v2/monitor/wifi/ap_status` | `fortigate_wifi_access_points`, `fortigate_wifi_fabric_clients`, `fortigate_wifi_fabric_max_allowed_clients` |
| `wifi_clients.probe_wifi_clients(client, meta)` | `api/v2/monitor/wifi/client` | `fortigate_wifi_client_*` |

Notes:

- IPsec tunnels of type `dialup` are skipped.
- `fortigate_vpn_users` counts sessions per user. It is produced only when
  `max_vpn_users` is not zero, and is left out (with a logged error) for any
  VDOM with more connections than that limit.
- Reboot and snapshot times are converted from milliseconds to seconds.
- Wi-Fi client discard and retry percentages are converted to ratios between
  0 and 1. Only the first 1000 Wi-Fi clients are requested.

## Errors

When the client raises, or the document does not have the expected shape,
the probe raises `fortiprobe.metrics.ProbeError`. `Desc.new_metric` raises
`ValueError` when the number of label values does not match the label names.

## Building your own metrics

`metrics.Desc(name, help, label_names)` describes a metric family;
`desc.new_metric(value_type, value, *label_values)` creates a `Metric`, with
`value_type` a `ValueType` (`GAUGE` or `COUNTER`). `Metric.label_pairs()`
returns the label pairs sorted by name.

## What it does not do

The package does not talk to a FortiGate itself: there is no HTTP client, no
authentication, no exporter server and no command-line tool. You supply the
client and serve the rendered text yourself. It has no probe for managed
access points.

## Running the tests

```
pip install "fortiprobe[test]"
pytest
```