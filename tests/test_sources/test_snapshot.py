"""Tests for loading ingress snapshots from JSON."""

import json

import pytest

from ingress2haproxy.models.ingress import (
    Endpoint,
    L4Backend,
    Redirect,
    SSLPassthroughBackend,
)
from ingress2haproxy.sources.snapshot import load_snapshot, parse_snapshot


SNAPSHOT = {
    "backends": [
        {
            "name": "default-web-8080",
            "service": "default/web",
            "port": 8080,
            "endpoints": [
                {"address": "10.0.0.1", "port": 8080},
                {"address": "10.0.0.2", "port": 8080, "max_fails": 3},
            ],
        },
    ],
    "servers": [
        {
            "hostname": "app.example.com",
            "ssl_certificate": "/ssl/app.pem",
            "ssl_pem_checksum": "abc123",
            "locations": [
                {
                    "path": "/",
                    "backend": "default-web-8080",
                    "redirect": {"ssl_redirect": False, "app_root": "/app"},
                    "basic_digest_auth": {"type": "basic", "realm": "Staff", "file": "/auth/staff.passwd"},
                    "whitelist": {"cidr": ["10.0.0.0/8", "192.168.0.0/16"]},
                },
                {"path": "/api", "backend": "default-api-80"},
            ],
        },
    ],
    "tcp_endpoints": [
        {
            "port": 5432,
            "backend": {"name": "postgres", "namespace": "db", "port": 5432},
            "endpoints": [{"address": "10.0.1.1", "port": 5432}],
        },
    ],
    "passthrough_backends": [{"backend": "default-tls-443", "hostname": "tls.example.com"}],
}


class TestParseSnapshot:
    def test_backends(self):
        snapshot = parse_snapshot(SNAPSHOT)
        backend = snapshot.backends[0]
        assert backend.name == "default-web-8080"
        assert backend.service == "default/web"
        assert backend.endpoints[1] == Endpoint("10.0.0.2", 8080, max_fails=3)

    def test_server_and_locations(self):
        snapshot = parse_snapshot(SNAPSHOT)
        server = snapshot.servers[0]
        assert server.hostname == "app.example.com"
        assert server.ssl_certificate == "/ssl/app.pem"
        assert [loc.path for loc in server.locations] == ["/", "/api"]

        root = server.locations[0]
        assert root.redirect == Redirect(ssl_redirect=False, app_root="/app")
        assert root.basic_digest_auth.file == "/auth/staff.passwd"
        assert root.basic_digest_auth.realm == "Staff"
        assert root.whitelist.cidr == ("10.0.0.0/8", "192.168.0.0/16")

    def test_location_defaults(self):
        snapshot = parse_snapshot(SNAPSHOT)
        api = snapshot.servers[0].locations[1]
        assert api.redirect.ssl_redirect is True
        assert api.basic_digest_auth.file == ""
        assert api.whitelist.cidr == ()

    def test_default_ssl_redirect_can_be_disabled(self):
        snapshot = parse_snapshot(SNAPSHOT, default_ssl_redirect=False)
        api = snapshot.servers[0].locations[1]
        assert api.redirect.ssl_redirect is False
        # Explicit values are not affected
        assert snapshot.servers[0].locations[0].redirect.ssl_redirect is False

    def test_l4_and_passthrough(self):
        snapshot = parse_snapshot(SNAPSHOT)
        assert snapshot.tcp_endpoints[0].port == 5432
        assert snapshot.tcp_endpoints[0].backend == L4Backend("postgres", "db", 5432)
        assert snapshot.udp_endpoints == ()
        assert snapshot.passthrough_backends == (
            SSLPassthroughBackend("default-tls-443", "tls.example.com"),
        )

    def test_empty_document(self):
        snapshot = parse_snapshot({})
        assert snapshot.servers == ()
        assert snapshot.backends == ()

    def test_missing_hostname_raises(self):
        with pytest.raises(KeyError):
            parse_snapshot({"servers": [{"locations": []}]})


class TestLoadSnapshot:
    def test_load_from_file(self, tmp_path):
        path = tmp_path / "ingress.json"
        path.write_text(json.dumps(SNAPSHOT))
        snapshot = load_snapshot(path)
        assert len(snapshot.servers) == 1
        assert snapshot.servers[0].hostname == "app.example.com"

    def test_load_fixture(self, fixtures_dir):
        snapshot = load_snapshot(fixtures_dir / "ingress.json")
        hostnames = [s.hostname for s in snapshot.servers]
        assert "_" in hostnames
