import ssl

import pytest
import yaml

from tests.fake.fake_send_receive import FakeSendMessage
from tests.utils import generate_server_cert, write_pem


@pytest.fixture
def send():
    return FakeSendMessage()


@pytest.fixture(scope="session")
def tls_files(tmp_path_factory):
    ca_cert, server_key, server_cert = generate_server_cert()
    base = tmp_path_factory.mktemp("tls")

    ca_path = base / "ca.pem"
    cert_path = base / "server.pem"
    key_path = base / "server.key"

    write_pem(ca_cert, ca_path)
    write_pem(server_cert, cert_path)
    write_pem(server_key, key_path)

    return ca_path, cert_path, key_path


@pytest.fixture(scope="session")
def server_ssl_ctx(tls_files) -> ssl.SSLContext:
    _, cert_path, key_path = tls_files
    ctx = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
    ctx.load_cert_chain(cert_path, key_path)
    return ctx


@pytest.fixture(scope="session")
def client_ssl_ctx(tls_files) -> ssl.SSLContext:
    ca_path, _, _ = tls_files
    ctx = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
    ctx.load_verify_locations(cafile=ca_path)
    return ctx


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Write a greeter YAML config and expose it to FakeTaurusConfig."""
    file = tmp_path / "taurus.yaml"

    def write(data: dict):
        file.write_text(yaml.dump(data))
        monkeypatch.setenv("TEST_TAURUSCONFIG", str(file))
        return file

    return write


@pytest.fixture
def taurusconf(tmp_path):
    file = tmp_path / "taurusconf.yaml"
    data = {
        "current-target": "ping",
        "targets": {
            "ping": {
                "url": "ws://192.168.1.120:11800/taurus",
                "script": ["PING"],
            },
            "backups": {
                "url": "ws://192.168.1.95:12053/taurus",
                "script": ["A", "", "test", "LIST_BACKUPS", "PING"],
            },
        },
    }
    file.write_text(yaml.safe_dump(data, sort_keys=False))
    return file

