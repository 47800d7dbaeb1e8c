"""SSL VPN statistics probe."""

from __future__ import annotations

from typing import Any

from .metrics import Desc, FortiClient, Metric, ProbeError, ValueType, fetch

SSL_USERS = Desc("fortigate_vpn_ssl_users", "Number of current SSL VPN users", ("vdom",))
SSL_TUNNELS = Desc(
    "fortigate_vpn_ssl_tunnels", "Number of current SSL VPN tunnels", ("vdom",)
)
SSL_CONNECTIONS = Desc(
    "fortigate_vpn_ssl_connections", "Number of current SSL VPN connections", ("vdom",)
)


def probe_vpn_ssl_stats(client: FortiClient, meta: Any = None) -> list[Metric]:
    """Report current SSL VPN users, tunnels and connections per VDOM."""
    response = fetch(client, "api/v2/monitor/vpn/ssl/stats", "vdom=*")
    if not isinstance(response, list):
        raise ProbeError("api/v2/monitor/vpn/ssl/stats: expected a list of VDOM results")

    metrics: list[Metric] = []
    for entry in response:
        vdom = entry.get("vdom", "")
        current = (entry.get("results") or {}).get("current") or {}
        metrics.append(SSL_USERS.new_metric(ValueType.GAUGE, current.get("users", 0), vdom))
        metrics.append(
            SSL_TUNNELS.new_metric(ValueType.GAUGE, current.get("tunnels", 0), vdom)
        )
        metrics.append(
            SSL_CONNECTIONS.new_metric(ValueType.GAUGE, current.get("connections", 0), vdom)
        )
    return metrics