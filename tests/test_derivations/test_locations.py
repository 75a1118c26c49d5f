"""Tests for the location builder."""

from ingress2haproxy.derivations.locations import build_locations, whitelist_expression
from ingress2haproxy.models.haproxy import AuthUser, Userlist
from ingress2haproxy.models.ingress import (
    BasicDigestAuth,
    Location,
    Redirect,
    Server,
    Whitelist,
)


def _server(*paths, hostname="app.example.com"):
    return Server(
        hostname=hostname,
        locations=tuple(Location(path=p, backend=f"be{p.replace('/', '-')}") for p in paths),
    )


class TestMatchPath:
    def test_non_root_prefix_match(self):
        locations, root = build_locations({}, _server("/api"))
        assert root is None
        assert locations[0].ha_match_path == " { path_beg /api }"
        assert not locations[0].is_root_location

    def test_root_alone_matches_unconditionally(self):
        locations, root = build_locations({}, _server("/"))
        assert root is locations[0]
        assert root.is_root_location
        assert root.ha_match_path == ""

    def test_root_excludes_other_paths_in_order(self):
        locations, root = build_locations({}, _server("/api", "/", "/static"))
        assert root.ha_match_path == " !{ path_beg /api /static }"
        assert [loc.ha_match_path for loc in locations] == [
            " { path_beg /api }",
            " !{ path_beg /api /static }",
            " { path_beg /static }",
        ]

    def test_root_listed_first(self):
        _, root = build_locations({}, _server("/", "/api", "/static"))
        assert root.ha_match_path == " !{ path_beg /api /static }"

    def test_only_exact_slash_is_root(self):
        locations, root = build_locations({}, _server("/app/", "//"))
        assert root is None
        assert not any(loc.is_root_location for loc in locations)

    def test_locations_keep_input_order(self):
        locations, _ = build_locations({}, _server("/b", "/", "/a"))
        assert [loc.path for loc in locations] == ["/b", "/", "/a"]

    def test_at_most_one_root(self):
        locations, _ = build_locations({}, _server("/", "/a", "/b"))
        assert sum(loc.is_root_location for loc in locations) == 1

    def test_no_locations(self):
        locations, root = build_locations({}, _server())
        assert locations == []
        assert root is None


class TestWhitelist:
    def test_cidrs_space_prefixed(self):
        location = Location(
            path="/", backend="be",
            whitelist=Whitelist(cidr=("10.0.0.0/8", "192.168.1.0/24")),
        )
        assert whitelist_expression(location) == " 10.0.0.0/8 192.168.1.0/24"

    def test_empty_whitelist(self):
        assert whitelist_expression(Location(path="/", backend="be")) == ""

    def test_attached_to_location(self):
        server = Server(
            hostname="app.example.com",
            locations=(Location(path="/", backend="be", whitelist=Whitelist(cidr=("1.2.3.4/32",))),),
        )
        locations, _ = build_locations({}, server)
        assert locations[0].ha_whitelist == " 1.2.3.4/32"


class TestUserlistResolution:
    def test_resolved_by_file(self):
        userlist = Userlist("staff", "Staff", (AuthUser("alice", "x"),))
        server = Server(
            hostname="app.example.com",
            locations=(
                Location(path="/", backend="be",
                         basic_digest_auth=BasicDigestAuth("basic", "Staff", "/auth/staff.passwd")),
                Location(path="/x", backend="be",
                         basic_digest_auth=BasicDigestAuth("basic", "Staff", "/auth/staff.passwd")),
            ),
        )
        locations, _ = build_locations({"/auth/staff.passwd": userlist}, server)
        assert locations[0].userlist is userlist
        assert locations[1].userlist is userlist

    def test_missing_userlist_means_no_auth(self):
        server = Server(
            hostname="app.example.com",
            locations=(
                Location(path="/", backend="be",
                         basic_digest_auth=BasicDigestAuth("basic", "Staff", "/auth/unknown.passwd")),
            ),
        )
        locations, _ = build_locations({}, server)
        assert locations[0].userlist == Userlist()
        assert not locations[0].userlist


class TestPassThrough:
    def test_backend_and_redirect_copied(self):
        redirect = Redirect(ssl_redirect=False, app_root="/app")
        server = Server(
            hostname="app.example.com",
            locations=(Location(path="/", backend="default-web-8080", redirect=redirect),),
        )
        locations, _ = build_locations({}, server)
        assert locations[0].backend == "default-web-8080"
        assert locations[0].redirect is redirect
