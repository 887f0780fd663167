"""The app's route table.

Maps external URL paths to in-app destinations. Order matters: more
specific patterns come first, since the first accepted match wins.
"""

from functools import cache

from deeplink.routing.registry import RouteRegistry
from deeplink.routing.route import RouteEntry
from deeplink.validation import max_length, params_schema, required, slug

# -- Param schemas ---------------------------------------------------------

MAX_USERNAME_LENGTH = 30
MAX_ID_LENGTH = 128
MAX_TOKEN_LENGTH = 512

_id_rules = [required, max_length(MAX_ID_LENGTH)]

username_schema = params_schema(username=[required, max_length(MAX_USERNAME_LENGTH), slug])
id_schema = params_schema(id=_id_rules)
post_id_schema = params_schema(postId=_id_rules)
comment_id_schema = params_schema(commentId=_id_rules)
room_id_schema = params_schema(roomId=_id_rules)
token_schema = params_schema(token=[required, max_length(MAX_TOKEN_LENGTH)])


def _settings(section: str, label: str) -> RouteEntry:
    return RouteEntry(f"/settings/{section}", f"/settings/{section}", "auth-required", label)


DEFAULT_ROUTES: tuple[RouteEntry, ...] = (
    # -- Auth (public) ------------------------------------------------------
    RouteEntry("/auth/reset", "/(auth)/reset-password", "public", "Reset Password", token_schema),
    RouteEntry("/auth/verify", "/(auth)/verify-email", "public", "Verify Email", token_schema),
    RouteEntry("/auth/callback", "/(auth)/login", "public", "OAuth Callback"),
    RouteEntry("/login", "/(auth)/login", "public", "Login"),
    RouteEntry("/signup", "/(auth)/signup", "public", "Sign Up"),
    RouteEntry("/forgot-password", "/(auth)/forgot-password", "public", "Forgot Password"),
    # -- Profiles -----------------------------------------------------------
    RouteEntry(
        "/u/:username",
        "/(protected)/profile/:username",
        "auth-required",
        "User Profile",
        username_schema,
    ),
    RouteEntry(
        "/profile/:username",
        "/(protected)/profile/:username",
        "auth-required",
        "User Profile (alias)",
        username_schema,
    ),
    # -- Posts --------------------------------------------------------------
    RouteEntry("/p/:id", "/(protected)/post/:id", "auth-required", "Post Detail", id_schema),
    RouteEntry(
        "/post/:id", "/(protected)/post/:id", "auth-required", "Post Detail (alias)", id_schema
    ),
    # -- Comments -----------------------------------------------------------
    RouteEntry(
        "/comments/:postId",
        "/(protected)/comments/:postId",
        "auth-required",
        "Post Comments",
        post_id_schema,
    ),
    RouteEntry(
        "/comments/replies/:commentId",
        "/(protected)/comments/replies/:commentId",
        "auth-required",
        "Comment Replies",
        comment_id_schema,
    ),
    # -- Events -------------------------------------------------------------
    RouteEntry("/e/:id", "/(protected)/events/:id", "auth-required", "Event Detail", id_schema),
    RouteEntry(
        "/events/:id",
        "/(protected)/events/:id",
        "auth-required",
        "Event Detail (alias)",
        id_schema,
    ),
    RouteEntry("/events", "/(protected)/(tabs)/events", "auth-required", "Events Tab"),
    # -- Stories ------------------------------------------------------------
    RouteEntry("/story/:id", "/(protected)/story/:id", "auth-required", "Story Viewer", id_schema),
    # -- Messages -----------------------------------------------------------
    RouteEntry("/messages", "/(protected)/messages", "auth-required", "Messages"),
    RouteEntry("/chat/:id", "/(protected)/chat/:id", "auth-required", "Chat Thread", id_schema),
    # -- Tickets ------------------------------------------------------------
    RouteEntry("/ticket/:id", "/(protected)/ticket/:id", "auth-required", "Ticket", id_schema),
    # -- Video / calls ------------------------------------------------------
    RouteEntry(
        "/call/:roomId", "/(protected)/call/:roomId", "auth-required", "Video Call", room_id_schema
    ),
    RouteEntry("/room/:id", "/(video)/room/:id", "auth-required", "Video Room", id_schema),
    RouteEntry("/rooms", "/(video)/rooms", "auth-required", "Video Rooms"),
    # -- Sneaky Lynk ----------------------------------------------------------
    RouteEntry(
        "/sneaky-lynk/room/:id",
        "/(protected)/sneaky-lynk/room/:id",
        "auth-required",
        "Sneaky Lynk Room",
        id_schema,
    ),
    # -- Settings -----------------------------------------------------------
    RouteEntry("/settings", "/settings", "auth-required", "Settings"),
    _settings("account", "Account Settings"),
    _settings("notifications", "Notification Settings"),
    _settings("privacy", "Privacy Settings"),
    _settings("blocked", "Blocked Accounts"),
    _settings("close-friends", "Close Friends Settings"),
    _settings("theme", "Theme Settings"),
    _settings("language", "Language Settings"),
    # -- Tabs / home ----------------------------------------------------------
    RouteEntry("/home", "/(protected)/(tabs)", "auth-required", "Home Feed"),
    RouteEntry("/search", "/(protected)/search", "auth-required", "Search"),
    RouteEntry("/activity", "/(protected)/(tabs)/activity", "auth-required", "Activity"),
    RouteEntry("/create", "/(protected)/(tabs)/create", "auth-required", "Create Post"),
    RouteEntry(
        "/close-friends", "/(protected)/close-friends", "auth-required", "Manage Close Friends"
    ),
)


@cache
def default_registry() -> RouteRegistry:
    """Compiled registry over ``DEFAULT_ROUTES``, built once per process."""
    registry = RouteRegistry(DEFAULT_ROUTES)
    registry.compile()
    return registry
