"""IPsec tunnel status and traffic probe."""

from __future__ import annotations

from typing import Any

from .metrics import Desc, FortiClient, Metric, ProbeError, ValueType, fetch

_LABELS = ("vdom", "name", "p2serial", "parent")

TUNNEL_UP = Desc(
    "fortigate_ipsec_tunnel_up", "Status of IPsec tunnel (0 - Down, 1 - Up)", _LABELS
)
TRANSMITTED = Desc(
    "fortigate_ipsec_tunnel_transmit_bytes_total",
    "Total number of bytes transmitted over the IPsec tunnel",
    _LABELS,
)
RECEIVED = Desc(
    "fortigate_ipsec_tunnel_receive_bytes_total",
    "Total number of bytes received over the IPsec tunnel",
    _LABELS,
)


def probe_vpn_ipsec(client: FortiClient, meta: Any = None) -> list[Metric]:
    """Report state and byte counters of every phase-2 selector of non-dialup tunnels."""
    response = fetch(client, "api/v2/monitor/vpn/ipsec", "vdom=*")
    if not isinstance(response, list):
        raise ProbeError("api/v2/monitor/vpn/ipsec: expected a list of VDOM results")

    metrics: list[Metric] = []
    for entry in response:
        vdom = entry.get("vdom", "")
        for tunnel in entry.get("results") or []:
            # Dial-up tunnels are client VPN connections.
            if tunnel.get("type") == "dialup":
                continue
            parent = tunnel.get("name", "")
            for proxy in tunnel.get("proxyid") or []:
                labels = (
                    vdom,
                    proxy.get("p2name", ""),
                    str(int(proxy.get("p2serial", 0))),
                    parent,
                )
                up = 1.0 if proxy.get("status") == "up" else 0.0
                metrics.append(TUNNEL_UP.new_metric(ValueType.GAUGE, up, *labels))
                metrics.append(
                    TRANSMITTED.new_metric(
                        ValueType.COUNTER, proxy.get("outgoing_bytes", 0), *labels
                    )
                )
                metrics.append(
                    RECEIVED.new_metric(
                        ValueType.COUNTER, proxy.get("incoming_bytes", 0), *labels
                    )
                )
    return metrics