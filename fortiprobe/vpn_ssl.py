"""SSL VPN connection and per-user probe."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from .metrics import Desc, FortiClient, Metric, ProbeError, ValueType, fetch

log = logging.getLogger(__name__)

VPN_CONNECTIONS = Desc("fortigate_vpn_connections", "Number of VPN connections", ("vdom",))
VPN_USERS = Desc(
    "fortigate_vpn_users", "Number of VPN users connections", ("vdom", "user")
)


def probe_vpn_ssl(client: FortiClient, meta: Any, max_vpn_users: int) -> list[Metric]:
    """Count SSL VPN connections per VDOM and, when enabled, per user.

    Per-user samples are produced only when ``max_vpn_users`` is non-zero and the
    VDOM has no more connections than that limit.
    """
    response = fetch(client, "api/v2/monitor/vpn/ssl", "vdom=*")
    if not isinstance(response, list):
        raise ProbeError("api/v2/monitor/vpn/ssl: expected a list of VDOM results")

    metrics: list[Metric] = []
    for entry in response:
        vdom = entry.get("vdom", "")
        results = entry.get("results") or []
        count = len(results)
        metrics.append(VPN_CONNECTIONS.new_metric(ValueType.GAUGE, count, vdom))

        if not max_vpn_users:
            continue
        if count > max_vpn_users:
            log.error(
                "Received more VPN Users than maximum (%d > %d) allowed, ignoring metric ...",
                count,
                max_vpn_users,
            )
            continue
        per_user = Counter(result.get("user_name", "") for result in results)
        metrics.extend(
            VPN_USERS.new_metric(ValueType.GAUGE, sessions, vdom, user)
            for user, sessions in per_user.items()
        )
    return metrics