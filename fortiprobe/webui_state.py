"""Web UI state probe: last reboot and last snapshot times."""

from __future__ import annotations

from typing import Any

from .metrics import Desc, FortiClient, Metric, ProbeError, ValueType, fetch

REBOOT_TIME = Desc(
    "fortigate_last_reboot_seconds", "Last system reboot epoch time in seconds"
)
SNAPSHOT_TIME = Desc(
    "fortigate_last_snapshot_seconds", "Last snapshot epoch time in seconds"
)


def probe_webui_state(client: FortiClient, meta: Any = None) -> list[Metric]:
    """Report last reboot and snapshot times, converted from milliseconds to seconds."""
    response = fetch(client, "api/v2/monitor/web-ui/state", "")
    if not isinstance(response, dict):
        raise ProbeError("api/v2/monitor/web-ui/state: expected an object")

    results = response.get("results") or {}
    return [
        REBOOT_TIME.new_metric(
            ValueType.GAUGE, float(results.get("utc_last_reboot", 0)) / 1000
        ),
        SNAPSHOT_TIME.new_metric(
            ValueType.GAUGE, float(results.get("snapshot_utc_time", 0)) / 1000
        ),
    ]