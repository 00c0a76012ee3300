import socket

from tests.helpers.spamlet_imports import ports


def test_bound_port_is_not_open():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.bind(("", 0))
        server.listen()
        port = server.getsockname()[1]

        assert ports.is_port_open(port) is False


def test_next_open_port_skips_busy_ports(monkeypatch):
    busy = {2222, 2223}
    monkeypatch.setattr(ports, "is_port_open", lambda port: port not in busy)

    assert ports.get_next_open_port() == 2224


def test_next_open_port_returns_none_when_exhausted(monkeypatch):
    probed = []

    def never_open(port):
        probed.append(port)
        return False

    monkeypatch.setattr(ports, "is_port_open", never_open)

    assert ports.get_next_open_port(65530) is None
    assert probed == [65530, 65531, 65532, 65533, 65534, 65535]


def test_found_port_is_bindable():
    port = ports.get_next_open_port()

    assert port is not None
    assert ports.is_port_open(port) is True
