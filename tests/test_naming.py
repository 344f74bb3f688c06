"""Tests for the naming module."""

from kalendis_mcp.naming import (
    colon_path,
    humanize,
    nest_route,
    nextjs_route_file,
    route_placeholders,
    success_status,
)


class TestHumanize:
    """Test operation name -> words conversion."""

    def test_camel_case(self):
        assert humanize("getUsersByAccountId") == "get users by account id"

    def test_single_word(self):
        assert humanize("add") == "add"

    def test_acronym(self):
        assert humanize("getHTTPStatus") == "get http status"


class TestRouteSpellings:
    """Test framework spellings of route templates."""

    def test_colon_path(self):
        assert colon_path("/api/users/{id}") == "/api/users/:id"

    def test_colon_path_static(self):
        assert colon_path("/api/account") == "/api/account"

    def test_nextjs_file(self):
        assert nextjs_route_file("/api/users/{id}") == "app/api/users/[id]/route.ts"

    def test_nextjs_file_static(self):
        assert nextjs_route_file("/api/availability/all") == "app/api/availability/all/route.ts"

    def test_nest_route_strips_controller_prefix(self):
        assert nest_route("/api/bookings/{id}") == "bookings/:id"

    def test_nest_route_prefix_only(self):
        assert nest_route("/api") == ""

    def test_nest_route_outside_prefix(self):
        assert nest_route("/health") == "health"

    def test_placeholders(self):
        assert route_placeholders("/api/{a}/x/{b}") == ["a", "b"]


class TestSuccessStatus:
    """Test the success status of generated handlers."""

    def test_post_create(self):
        assert success_status("addBooking", "POST") == 201

    def test_post_lookup(self):
        assert success_status("getBookingsByIds", "POST") == 200

    def test_put(self):
        assert success_status("updateUser", "PUT") == 200

    def test_get(self):
        assert success_status("getAccount", "GET") == 200
