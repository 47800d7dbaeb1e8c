import pytest

from fortiprobe.metrics import ProbeError, render
from fortiprobe.vpn_ipsec import probe_vpn_ipsec

PATH = "api/v2/monitor/vpn/ipsec"
UP = "fortigate_ipsec_tunnel_up"
TX = "fortigate_ipsec_tunnel_transmit_bytes_total"
RX = "fortigate_ipsec_tunnel_receive_bytes_total"


class FakeClient:
    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.calls = []

    def get(self, path, query):
        self.calls.append((path, query))
        if self.error is not None:
            raise self.error
        return self.responses[path]


def _proxy(name, serial, status, incoming, outgoing):
    return {
        "p2name": name,
        "p2serial": serial,
        "status": status,
        "incoming_bytes": incoming,
        "outgoing_bytes": outgoing,
    }


def _tunnels(*tunnels):
    return [{"vdom": "root", "results": list(tunnels)}]


IPSEC = _tunnels(
    {
        "name": "tunnel_1",
        "type": "automatic",
        "proxyid": [
            _proxy("tunnel_1-sub", 1, "up", 14298240, 14248560),
            _proxy("tunnel_1-sub", 12, "down", 14298240, 14248560),
        ],
    },
    {
        "name": "dialup_clients",
        "type": "dialup",
        "proxyid": [_proxy("dialup_clients", 3, "up", 5, 6)],
    },
)

IPSEC_COMMON_P2 = _tunnels(
    {
        "name": "My VPN",
        "type": "automatic",
        "proxyid": [
            _proxy("mgmt", 1, "down", 0, 0),
            _proxy("some-network", 14, "up", 274832, 112307),
            _proxy("CommonP2", 22, "down", 0, 0),
            _proxy("CommonP2", 23, "up", 4782292004, 1575332390),
            _proxy("CommonP2", 24, "up", 382868846, 553928639),
            _proxy("CommonP2", 25, "up", 1581264, 31269542),
        ],
    }
)


def _samples(metrics):
    return {
        (m.name, tuple(tuple(pair) for pair in m.label_pairs())): m.value
        for m in metrics
    }


def _key(metric, name, serial, parent):
    labels = (("name", name), ("p2serial", serial), ("parent", parent), ("vdom", "root"))
    return (metric, labels)


def _expected(parent, rows):
    expected = {}
    for name, serial, up, received, transmitted in rows:
        expected[_key(UP, name, serial, parent)] = up
        expected[_key(RX, name, serial, parent)] = received
        expected[_key(TX, name, serial, parent)] = transmitted
    return expected


def test_vpn_ipsec():
    client = FakeClient({PATH: IPSEC})
    metrics = probe_vpn_ipsec(client, None)
    assert _samples(metrics) == _expected(
        "tunnel_1",
        [
            ("tunnel_1-sub", "1", 1, 14298240, 14248560),
            ("tunnel_1-sub", "12", 0, 14298240, 14248560),
        ],
    )
    assert client.calls == [(PATH, "vdom=*")]


def test_vpn_ipsec_rendering():
    lines = render(probe_vpn_ipsec(FakeClient({PATH: IPSEC}), None)).splitlines()
    assert f"# TYPE {UP} gauge" in lines
    assert f"# TYPE {RX} counter" in lines
    assert f"# TYPE {TX} counter" in lines
    received = [line for line in lines if line.startswith(RX + "{")]
    assert len(received) == 2
    assert all(line.endswith(" 1.429824e+07") for line in received)
    assert lines.index(f"# TYPE {RX} counter") < lines.index(f"# TYPE {TX} counter")
    assert lines.index(f"# TYPE {TX} counter") < lines.index(f"# TYPE {UP} gauge")


def test_vpn_ipsec_with_common_p2_names():
    client = FakeClient({PATH: IPSEC_COMMON_P2})
    metrics = probe_vpn_ipsec(client, None)
    assert _samples(metrics) == _expected(
        "My VPN",
        [
            ("mgmt", "1", 0, 0, 0),
            ("some-network", "14", 1, 274832, 112307),
            ("CommonP2", "22", 0, 0, 0),
            ("CommonP2", "23", 1, 4782292004, 1575332390),
            ("CommonP2", "24", 1, 382868846, 553928639),
            ("CommonP2", "25", 1, 1581264, 31269542),
        ],
    )


def test_common_p2_names_render_large_values():
    text = render(probe_vpn_ipsec(FakeClient({PATH: IPSEC_COMMON_P2}), None))
    assert " 4.782292004e+09\n" in text
    assert " 3.1269542e+07\n" in text


def test_dialup_tunnels_are_skipped():
    client = FakeClient({PATH: IPSEC})
    parents = {m.label_pairs()[2][1] for m in probe_vpn_ipsec(client, None)}
    assert parents == {"tunnel_1"}


def test_fetch_failure_raises():
    client = FakeClient(error=OSError("connection refused"))
    with pytest.raises(ProbeError):
        probe_vpn_ipsec(client, None)


def test_unexpected_document_raises():
    client = FakeClient({PATH: {"results": []}})
    with pytest.raises(ProbeError):
        probe_vpn_ipsec(client, None)