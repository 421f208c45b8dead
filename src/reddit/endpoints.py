"""
Reddit API endpoint definitions.

Each public API method is described by one Endpoint record: HTTP verb, path
template, required OAuth scope and the parameter schema. The client binds and
validates the caller's arguments against the schema, then builds the request
with Endpoint.build().

Endpoints whose path or body depends on argument values use small hooks:
- route: picks the path template from the bound values
- check: cross-parameter validation
- prepare: final adjustments to the encoded fields

Documentation: https://www.reddit.com/dev/api/oauth
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple
from urllib.parse import quote

from src.api.exceptions import ValidationError

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

TIME_FILTERS = ("hour", "day", "week", "month", "year", "all")
LIVE_CONTRIBUTOR_TYPES = ("liveupdate_contributor_invite", "liveupdate_contributor")
FLAIR_POSITIONS = ("left", "right")
IMAGE_EXTENSIONS = ("jpg", "jpeg", "png")

# Listings served directly under /r/{subreddit}/ (others live under /about/)
SUBREDDIT_LISTINGS = ("new", "hot", "random", "top", "controversial")


def encode_value(value: Any) -> str:
    """Encode a parameter value for a query string or form body."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


@dataclass(frozen=True)
class Param:
    """
    One endpoint parameter.

    Attributes:
        name: Argument name (and wire field name unless field is set)
        kind: Expected Python type: str, int, bool or list (list of strings)
        required: Whether a value must be supplied
        default: Value used when the argument is omitted
        choices: Allowed values
        max_length: Maximum string length
        min_value: Minimum integer value
        max_value: Maximum integer value
        location: "auto" (path if the template names it, else query for GET
                  and body for POST), "file" for multipart uploads, or
                  "none" for values only consumed by hooks
        field: Wire field name when it differs from the argument name
        transform: Applied to the value before encoding
        safe: Characters left unquoted when the value is used in the path
    """

    name: str
    kind: type = str
    required: bool = True
    default: Any = None
    choices: Optional[Tuple[Any, ...]] = None
    max_length: Optional[int] = None
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    location: str = "auto"
    field: Optional[str] = None
    transform: Optional[Callable[[Any], Any]] = None
    safe: str = ""


def _opt(name: str, kind: type = str, default: Any = None, **kwargs: Any) -> Param:
    return Param(name, kind, required=False, default=default, **kwargs)


def _listing(max_limit: int) -> Tuple[Param, ...]:
    return (
        _opt("limit", int, 25, min_value=1, max_value=max_limit),
        _opt("after"),
        _opt("before"),
    )


@dataclass
class EndpointRequest:
    """A request built from an endpoint and bound argument values."""

    method: str
    path: str
    params: Dict[str, str] = field(default_factory=dict)
    data: Optional[Dict[str, str]] = None
    files: Optional[Dict[str, str]] = None


@dataclass(frozen=True)
class Endpoint:
    """
    Declarative description of one Reddit API method.

    Attributes:
        name: Client method name
        method: HTTP verb ("GET" or "POST")
        path: Path template relative to the API base URL
        scope: OAuth scope the endpoint requires ("any" if none)
        params: Parameter schema in positional order
        api_type: Whether POST bodies carry api_type=json
        fixed: Constant fields added to every request
        route: Returns the path template for the bound values
        check: Raises ValidationError for invalid value combinations
        prepare: Adjusts the encoded fields in place
        doc: One-line description
    """

    name: str
    method: str
    path: str
    scope: str
    params: Tuple[Param, ...] = ()
    api_type: bool = False
    fixed: Tuple[Tuple[str, str], ...] = ()
    route: Optional[Callable[[Dict[str, Any]], str]] = None
    check: Optional[Callable[[Dict[str, Any]], None]] = None
    prepare: Optional[Callable[[Dict[str, Any], Dict[str, str]], None]] = None
    doc: str = ""

    def path_template(self, values: Dict[str, Any]) -> str:
        """Return the path template for the bound values."""
        return self.route(values) if self.route else self.path

    def path_params(self, values: Dict[str, Any]) -> Tuple[str, ...]:
        """Return the parameter names interpolated into the path."""
        return tuple(_PLACEHOLDER.findall(self.path_template(values)))

    def build(self, values: Dict[str, Any]) -> EndpointRequest:
        """
        Build the request for validated argument values.

        Args:
            values: Argument values keyed by parameter name

        Returns:
            EndpointRequest with the path, query, body and upload fields
        """
        template = self.path_template(values)
        placeholders = set(_PLACEHOLDER.findall(template))

        path_values: Dict[str, str] = {}
        fields: Dict[str, str] = {}
        files: Dict[str, str] = {}

        for param in self.params:
            value = values.get(param.name)
            if value is not None and param.transform:
                value = param.transform(value)

            if param.name in placeholders:
                path_values[param.name] = quote(encode_value(value), safe=param.safe)
                continue
            if param.location == "none" or value is None:
                continue
            if value == "" and not param.required:
                continue

            wire_name = param.field or param.name
            if param.location == "file":
                files[wire_name] = value
            else:
                fields[wire_name] = encode_value(value)

        fields.update(self.fixed)
        if self.prepare:
            self.prepare(values, fields)

        path = _PLACEHOLDER.sub(lambda m: path_values[m.group(1)], template)

        if self.method == "GET":
            return EndpointRequest("GET", path, params=fields)

        data = {"api_type": "json", **fields} if self.api_type else fields
        return EndpointRequest("POST", path, data=data, files=files or None)


# Hooks


def _by_state(on: str, off: str) -> Callable[[Dict[str, Any]], str]:
    return lambda values: on if values["state"] else off


def _gold_route(values: Dict[str, Any]) -> str:
    if values.get("months") is not None:
        return "/api/v1/gold/give/{name}"
    return "/api/v1/gold/gild/{name}"


def _upload_check(values: Dict[str, Any]) -> None:
    path = values["file"]
    if not os.path.isfile(path):
        raise ValidationError(f"{path} does not exist.", param="file")
    if _extension(path) not in IMAGE_EXTENSIONS:
        raise ValidationError(
            "Invalid image file format. Allowed formats: jpg, png.", param="file"
        )


def _upload_prepare(values: Dict[str, Any], fields: Dict[str, str]) -> None:
    fields["img_type"] = _extension(values["file"])


def _extension(path: str) -> str:
    return os.path.splitext(path)[1].lstrip(".").lower()


def _wiki_settings_prepare(values: Dict[str, Any], fields: Dict[str, str]) -> None:
    fields["page"] = values["page"]


def _message_state_route(values: Dict[str, Any]) -> str:
    if values["state"] == "read_all":
        return "/api/read_all_messages"
    return "/api/{state}_message"


def _message_state_check(values: Dict[str, Any]) -> None:
    if values["state"] != "read_all" and not values.get("ids"):
        raise ValidationError(
            "ids parameter in set_message_state must not be empty unless state is read_all",
            param="ids",
        )


def _message_state_prepare(values: Dict[str, Any], fields: Dict[str, str]) -> None:
    if values["state"] == "read_all":
        fields.pop("id", None)


def _posts_route(values: Dict[str, Any]) -> str:
    if values["where"] in SUBREDDIT_LISTINGS:
        return "/r/{subreddit}/{where}"
    return "/r/{subreddit}/about/{where}"


def _search_route(values: Dict[str, Any]) -> str:
    return "/r/{subreddit}/search" if values.get("subreddit") else "/search"


def _search_prepare(values: Dict[str, Any], fields: Dict[str, str]) -> None:
    if values.get("subreddit"):
        fields["restrict_sr"] = "true"


def _hide_check(values: Dict[str, Any]) -> None:
    if not values["ids"]:
        raise ValidationError("ids parameter in hide must not be empty", param="ids")


def _save_check(values: Dict[str, Any]) -> None:
    if values["state"] and not values.get("category"):
        raise ValidationError(
            "category parameter in save must not be empty when state is true",
            param="category",
        )


def _save_prepare(values: Dict[str, Any], fields: Dict[str, str]) -> None:
    if not values["state"]:
        fields.pop("category", None)


def _story_prepare(values: Dict[str, Any], fields: Dict[str, str]) -> None:
    if values["kind"] == "link":
        fields["url"] = fields.pop("text")


def _subscribe_prepare(values: Dict[str, Any], fields: Dict[str, str]) -> None:
    fields["action"] = "sub" if values["state"] else "unsub"


_DEFINITIONS = (
    # any
    Endpoint(
        "add_comment", "POST", "/api/comment", "submit",
        (Param("thing_id"), Param("text")),
        api_type=True, doc="Submit a new comment or reply to a message.",
    ),
    Endpoint(
        "needs_captcha", "GET", "/api/needs_captcha", "any",
        doc="Check whether CAPTCHAs are needed for API methods that define the captcha field.",
    ),
    Endpoint(
        "new_captcha", "POST", "/api/new_captcha", "any",
        api_type=True, doc="Responds with an iden of a new CAPTCHA.",
    ),
    Endpoint(
        "get_captcha_img", "GET", "/captcha/{iden}", "any",
        (Param("iden"),), doc="Request a CAPTCHA image given an iden.",
    ),
    # creddits
    Endpoint(
        "give_gold", "POST", "/api/v1/gold/gild/{name}", "creddits",
        (Param("name"), _opt("months", int, min_value=1, max_value=36)),
        route=_gold_route,
        doc="Gild a thing by fullname, or give months of gold to a user by name.",
    ),
    # edit
    Endpoint(
        "delete_content", "POST", "/api/del", "edit",
        (Param("id"),), doc="Delete a Link or Comment.",
    ),
    Endpoint(
        "edit_content", "POST", "/api/editusertext", "edit",
        (Param("thing_id"), Param("text")),
        api_type=True, doc="Edit the body text of a comment or self-post.",
    ),
    Endpoint(
        "delete_update", "POST", "/api/live/{thread}/delete_update", "edit",
        (Param("id"), Param("thread")),
        api_type=True, doc="Delete an update from the live thread.",
    ),
    Endpoint(
        "strike_update", "POST", "/api/live/{thread}/strike_update", "edit",
        (Param("id"), Param("thread")),
        api_type=True, doc="Strike (mark incorrect and cross out) an update in the live thread.",
    ),
    Endpoint(
        "send_replies", "POST", "/api/sendreplies", "edit",
        (Param("id"), Param("state", bool)),
        doc="Enable or disable inbox replies for a link or comment.",
    ),
    # flair
    Endpoint(
        "get_user_flairs", "POST", "/r/{subreddit}/api/flairselector", "flair",
        (Param("subreddit"), _opt("name")),
        doc="Return information about a user's flair options.",
    ),
    Endpoint(
        "get_link_flairs", "POST", "/r/{subreddit}/api/flairselector", "flair",
        (Param("subreddit"), Param("link")),
        doc="Return information about a link's flair options.",
    ),
    Endpoint(
        "set_user_flair", "POST", "/r/{subreddit}/api/selectflair", "flair",
        (
            Param("subreddit"),
            Param("flair_template_id"),
            Param("text", max_length=64),
            _opt("name"),
        ),
        api_type=True, doc="Select a user flair template.",
    ),
    Endpoint(
        "set_link_flair", "POST", "/r/{subreddit}/api/selectflair", "flair",
        (
            Param("subreddit"),
            Param("link"),
            Param("flair_template_id"),
            Param("text", max_length=64),
        ),
        api_type=True, doc="Select a link flair template.",
    ),
    Endpoint(
        "set_flair_enabled", "POST", "/r/{subreddit}/api/setflairenabled", "flair",
        (Param("subreddit"), Param("flair_enabled", bool)),
        api_type=True, doc="Enable or disable your flair in a subreddit.",
    ),
    # history
    Endpoint(
        "get_user_history", "GET", "/user/{username}/{where}", "history",
        (
            Param("username"),
            Param(
                "where",
                choices=(
                    "overview", "submitted", "comments", "upvoted",
                    "downvoted", "hidden", "saved", "gilded",
                ),
            ),
            _opt("sort", default="new", choices=("hot", "new", "top", "controversial")),
            _opt("t", default="all", choices=TIME_FILTERS),
        ),
        doc="Get a user's history.",
    ),
    # identity
    Endpoint(
        "get_current_user", "GET", "/api/v1/me", "identity",
        doc="Get the identity of the authorized user.",
    ),
    Endpoint(
        "get_current_user_prefs", "GET", "/api/v1/me/prefs", "identity",
        (_opt("fields", list),), doc="Get the preference settings of the authorized user.",
    ),
    Endpoint(
        "get_current_user_trophies", "GET", "/api/v1/me/trophies", "identity",
        doc="Get the trophies of the authorized user.",
    ),
    # livemanage
    Endpoint(
        "accept_live_thread_contributor_invite", "POST",
        "/api/live/{thread}/accept_contributor_invite", "livemanage",
        (Param("thread"),), api_type=True,
        doc="Accept a pending invitation to contribute to the thread.",
    ),
    Endpoint(
        "close_live_thread", "POST", "/api/live/{thread}/close_thread", "livemanage",
        (Param("thread"),), api_type=True, doc="Permanently close the thread.",
    ),
    Endpoint(
        "edit_live_thread", "POST", "/api/live/{thread}/edit", "livemanage",
        (
            Param("thread"),
            _opt("description"),
            _opt("nsfw", bool),
            _opt("resources"),
            _opt("title", max_length=120),
        ),
        api_type=True, doc="Configure the thread.",
    ),
    Endpoint(
        "invite_contributor_to_live_thread", "POST",
        "/api/live/{thread}/invite_contributor", "livemanage",
        (
            Param("thread"),
            Param("name"),
            Param("permissions"),
            Param("type", choices=LIVE_CONTRIBUTOR_TYPES),
        ),
        api_type=True, doc="Invite another user to contribute to the thread.",
    ),
    Endpoint(
        "leave_contributor_of_live_thread", "POST",
        "/api/live/{thread}/leave_contributor", "livemanage",
        (Param("thread"),), api_type=True,
        doc="Abdicate contributorship of the thread.",
    ),
    Endpoint(
        "revoke_live_thread_contributorship", "POST",
        "/api/live/{thread}/rm_contributor", "livemanage",
        (Param("thread"), Param("id")), api_type=True,
        doc="Revoke another user's contributorship.",
    ),
    Endpoint(
        "set_live_thread_contributor_permissions", "POST",
        "/api/live/{thread}/set_contributor_permissions", "livemanage",
        (
            Param("thread"),
            Param("name"),
            Param("permissions"),
            Param("type", choices=LIVE_CONTRIBUTOR_TYPES),
        ),
        api_type=True, doc="Change a contributor or contributor invite's permissions.",
    ),
    # modconfig
    Endpoint(
        "delete_banner", "POST", "/r/{subreddit}/api/delete_sr_banner", "modconfig",
        (Param("subreddit"),), api_type=True, doc="Remove the subreddit's custom mobile banner.",
    ),
    Endpoint(
        "delete_header", "POST", "/r/{subreddit}/api/delete_sr_header", "modconfig",
        (Param("subreddit"),), api_type=True, doc="Remove the subreddit's custom header image.",
    ),
    Endpoint(
        "delete_icon", "POST", "/r/{subreddit}/api/delete_sr_icon", "modconfig",
        (Param("subreddit"),), api_type=True, doc="Remove the subreddit's custom mobile icon.",
    ),
    Endpoint(
        "delete_image", "POST", "/r/{subreddit}/api/delete_sr_img", "modconfig",
        (Param("subreddit"), Param("img_name")), api_type=True,
        doc="Remove an image from the subreddit's custom image set.",
    ),
    Endpoint(
        "upload_image", "POST", "/r/{subreddit}/api/upload_sr_img", "modconfig",
        (
            Param("file", location="file"),
            Param("subreddit"),
            _opt("header", bool, False, transform=int),
            _opt("name", default=""),
        ),
        check=_upload_check, prepare=_upload_prepare,
        doc="Add or replace a subreddit image, custom header logo, custom mobile icon, or custom mobile banner.",
    ),
    Endpoint(
        "set_stylesheet", "POST", "/r/{subreddit}/api/subreddit_stylesheet", "modconfig",
        (Param("subreddit"), Param("stylesheet_contents"), _opt("reason", default="")),
        api_type=True, fixed=(("op", "save"),),
        doc="Update a subreddit's stylesheet.",
    ),
    Endpoint(
        "get_stylesheet", "GET", "/r/{subreddit}/about/stylesheet", "modconfig",
        (Param("subreddit"),), doc="Get the subreddit's current stylesheet.",
    ),
    Endpoint(
        "get_sub_settings", "GET", "/r/{subreddit}/about/edit", "modconfig",
        (Param("subreddit"),), doc="Get the current settings of a subreddit.",
    ),
    # modcontributors
    Endpoint(
        "mute_message_author", "POST", "/api/mute_message_author", "modcontributors",
        (Param("id"),), doc="Mute a user via modmail.",
    ),
    Endpoint(
        "unmute_message_author", "POST", "/api/unmute_message_author", "modcontributors",
        (Param("id"),), doc="Unmute a user via modmail.",
    ),
    # modflair
    Endpoint(
        "clear_flair_templates", "POST", "/r/{subreddit}/api/clearflairtemplates", "modflair",
        (Param("subreddit"), Param("flair_type", choices=("USER_FLAIR", "LINK_FLAIR"))),
        api_type=True, doc="Clear flair templates.",
    ),
    Endpoint(
        "delete_flair", "POST", "/r/{subreddit}/api/deleteflair", "modflair",
        (Param("subreddit"), Param("name")), api_type=True, doc="Delete a user's flair.",
    ),
    Endpoint(
        "delete_flair_template", "POST", "/r/{subreddit}/api/deleteflairtemplate", "modflair",
        (Param("subreddit"), Param("flair_template_id")), api_type=True,
        doc="Delete a flair template.",
    ),
    Endpoint(
        "set_flair", "POST", "/r/{subreddit}/api/flair", "modflair",
        (Param("subreddit"), Param("name"), Param("text", max_length=64), Param("css_class")),
        doc="Set a user's flair.",
    ),
    Endpoint(
        "set_flair_config", "POST", "/r/{subreddit}/api/flairconfig", "modflair",
        (
            Param("subreddit"),
            Param("flair_enabled", bool),
            Param("flair_position", choices=FLAIR_POSITIONS),
            Param("flair_self_assign_enabled", bool),
            Param("link_flair_position", choices=FLAIR_POSITIONS),
            Param("link_flair_self_assign_enabled", bool),
        ),
        api_type=True, doc="Configure subreddit flair.",
    ),
    Endpoint(
        "set_flair_csv", "POST", "/r/{subreddit}/api/flaircsv", "modflair",
        (Param("subreddit"), Param("flair_csv")), doc="Change the flair of multiple users.",
    ),
    Endpoint(
        "get_flair_list", "GET", "/r/{subreddit}/api/flairlist", "modflair",
        (Param("subreddit"),) + _listing(1000), doc="List user flair in a subreddit.",
    ),
    # modlog
    Endpoint(
        "get_mod_log", "GET", "/r/{subreddit}/about/log", "modlog",
        (Param("subreddit"), _opt("type")) + _listing(1000),
        doc="Get a list of recent moderation actions.",
    ),
    # modothers
    Endpoint(
        "set_permissions", "POST", "/r/{subreddit}/api/setpermissions", "modothers",
        (Param("subreddit"), Param("name"), Param("permissions"), Param("type")),
        api_type=True, doc="Set a moderator's or contributor's permissions.",
    ),
    # modposts
    Endpoint(
        "approve", "POST", "/api/approve", "modposts",
        (Param("id"),), doc="Approve a link or comment.",
    ),
    Endpoint(
        "distinguish", "POST", "/api/distinguish", "modposts",
        (Param("id"), Param("how", choices=("yes", "no", "admin", "special"))),
        api_type=True, doc="Distinguish a thing's author with a sigil.",
    ),
    Endpoint(
        "ignore_reports", "POST", "/api/ignore_reports", "modposts",
        (Param("id"), Param("state", bool, location="none")),
        route=_by_state("/api/ignore_reports", "/api/unignore_reports"),
        doc="Prevent (or allow) future reports on a thing from causing notifications.",
    ),
    Endpoint(
        "mark_nsfw", "POST", "/api/marknsfw", "modposts",
        (Param("id"), Param("state", bool, location="none")),
        route=_by_state("/api/marknsfw", "/api/unmarknsfw"),
        doc="Mark (or unmark) a link NSFW.",
    ),
    Endpoint(
        "remove", "POST", "/api/remove", "modposts",
        (Param("id"), _opt("spam", bool, False)),
        doc="Remove a link, comment, or modmail message.",
    ),
    Endpoint(
        "set_contest_mode", "POST", "/api/set_contest_mode", "modposts",
        (Param("id"), Param("state", bool)), api_type=True,
        doc="Set or unset contest mode for a link's comments.",
    ),
    Endpoint(
        "set_sticky", "POST", "/api/set_subreddit_sticky", "modposts",
        (Param("id"), Param("state", bool)), api_type=True,
        doc="Set or unset a link as the sticky in its subreddit.",
    ),
    Endpoint(
        "set_suggested_sort", "POST", "/api/set_suggested_sort", "modposts",
        (
            Param("id"),
            Param(
                "sort",
                choices=(
                    "confidence", "top", "new", "hot", "controversial",
                    "old", "random", "qa", "blank",
                ),
            ),
        ),
        api_type=True, doc="Set a suggested sort for a link.",
    ),
    # modself
    Endpoint(
        "accept_moderator_invite", "POST", "/r/{subreddit}/api/accept_moderator_invite", "modself",
        (Param("subreddit"),), api_type=True, doc="Accept an invite to moderate the subreddit.",
    ),
    Endpoint(
        "leave_contributor", "POST", "/api/leavecontributor", "modself",
        (Param("id"),), api_type=True, doc="Abdicate approved submitter status in a subreddit.",
    ),
    Endpoint(
        "leave_moderator", "POST", "/api/leavemoderator", "modself",
        (Param("id"),), api_type=True, doc="Abdicate moderator status in a subreddit.",
    ),
    # modwiki
    Endpoint(
        "set_wiki_editor", "POST", "/r/{subreddit}/api/wiki/alloweditor/{act}", "modwiki",
        (Param("username"), Param("subreddit"), Param("page"), Param("act", choices=("del", "add"))),
        doc="Allow or deny a user to edit a wiki page.",
    ),
    Endpoint(
        "hide_wiki_page", "POST", "/r/{subreddit}/api/wiki/hide", "modwiki",
        (Param("subreddit"), Param("page"), Param("revision")),
        doc="Toggle the public visibility of a wiki page revision.",
    ),
    Endpoint(
        "revert_wiki_page", "POST", "/r/{subreddit}/api/wiki/revert", "modwiki",
        (Param("subreddit"), Param("page"), Param("revision")),
        doc="Revert a wiki page to a revision.",
    ),
    Endpoint(
        "get_wiki_page_settings", "GET", "/r/{subreddit}/wiki/settings/{page}", "modwiki",
        (Param("subreddit"), Param("page")),
        doc="Retrieve the current permission settings for a wiki page.",
    ),
    Endpoint(
        "set_wiki_page_settings", "POST", "/r/{subreddit}/wiki/settings/{page}", "modwiki",
        (
            Param("subreddit"),
            Param("page"),
            Param("permlevel", int, min_value=0, max_value=2),
            Param("listed", bool),
        ),
        prepare=_wiki_settings_prepare,
        doc="Update the permissions and visibility of a wiki page.",
    ),
    # wikiedit
    Endpoint(
        "edit_wiki_page", "POST", "/r/{subreddit}/api/wiki/edit", "wikiedit",
        (
            Param("subreddit"),
            Param("page"),
            Param("content"),
            _opt("previous"),
            _opt("reason", max_length=256),
        ),
        doc="Edit a wiki page.",
    ),
    # wikiread
    Endpoint(
        "get_wiki_page", "GET", "/r/{subreddit}/wiki/{page}", "wikiread",
        (Param("subreddit"), Param("page")), doc="Return the content of a wiki page.",
    ),
    Endpoint(
        "get_wiki_pages", "GET", "/r/{subreddit}/wiki/pages", "wikiread",
        (Param("subreddit"),), doc="Retrieve a list of wiki pages in the subreddit.",
    ),
    Endpoint(
        "get_wiki_page_discussion", "GET", "/r/{subreddit}/wiki/discussions/{page}", "wikiread",
        (Param("subreddit"), Param("page")),
        doc="Retrieve a list of discussions about a wiki page.",
    ),
    Endpoint(
        "get_wiki_revisions", "GET", "/r/{subreddit}/wiki/revisions", "wikiread",
        (Param("subreddit"),), doc="Retrieve a list of recently changed wiki pages.",
    ),
    Endpoint(
        "get_wiki_page_revisions", "GET", "/r/{subreddit}/wiki/revisions/{page}", "wikiread",
        (Param("subreddit"), Param("page")),
        doc="Retrieve a list of revisions of a wiki page.",
    ),
    # mysubreddits
    Endpoint(
        "get_friend_info", "GET", "/api/v1/me/friends/{username}", "mysubreddits",
        (Param("username"),), doc="Get information about a specific friend.",
    ),
    Endpoint(
        "get_karma", "GET", "/api/v1/me/karma", "mysubreddits",
        doc="Return a breakdown of subreddit karma.",
    ),
    Endpoint(
        "get_sub_rel", "GET", "/subreddits/mine/{where}", "mysubreddits",
        (_opt("where", default="subscriber", choices=("subscriber", "contributor", "moderator")),)
        + _listing(100),
        doc="Get subreddits the user has a relationship with.",
    ),
    Endpoint(
        "get_all_subs", "GET", "/subreddits/{where}", "read",
        (Param("where", choices=("popular", "new", "gold", "default")),) + _listing(100),
        doc="Get all subreddits.",
    ),
    # privatemessages
    Endpoint(
        "set_content_block", "POST", "/api/block", "privatemessages",
        (Param("id"),), doc="Block the author of a thing via inbox.",
    ),
    Endpoint(
        "send_message", "POST", "/api/compose", "privatemessages",
        (Param("to"), Param("subject", max_length=100), Param("text")),
        api_type=True, doc="Send a private message.",
    ),
    Endpoint(
        "set_message_state", "POST", "/api/{state}_message", "privatemessages",
        (
            _opt(
                "state", default="read", choices=("read", "read_all", "unread"), location="none"
            ),
            _opt("ids", list, field="id"),
        ),
        route=_message_state_route, check=_message_state_check, prepare=_message_state_prepare,
        doc="Mark messages as read or unread, or mark all messages as read.",
    ),
    Endpoint(
        "get_notifications", "GET", "/api/v1/me/notifications", "privatemessages",
        (
            _opt("count", int, 30, min_value=0, max_value=1000),
            _opt("sort", default="new", choices=("new", "old", "None")),
        ),
        doc="Get notifications for the current user.",
    ),
    Endpoint(
        "get_messages", "GET", "/message/{where}", "privatemessages",
        (_opt("where", default="inbox", choices=("inbox", "unread", "sent")),),
        doc="Get private messages.",
    ),
    # read
    Endpoint(
        "get_posts", "GET", "/r/{subreddit}/{where}", "read",
        (
            Param("where"),
            Param("subreddit"),
            _opt("only", choices=("links", "comments", "")),
        )
        + _listing(100),
        route=_posts_route, doc="Get a listing of posts in a subreddit.",
    ),
    Endpoint(
        "search", "GET", "/search", "read",
        (
            Param("q", max_length=512),
            _opt("subreddit"),
            _opt("sort", default="relevance", choices=("relevance", "hot", "top", "new", "comments")),
            _opt("t", default="all", choices=TIME_FILTERS),
            _opt("count", int, 0, min_value=0),
            _opt("after"),
            _opt("before"),
        ),
        route=_search_route, prepare=_search_prepare,
        doc="Search links site-wide or in one subreddit.",
    ),
    Endpoint(
        "get_sidebar", "GET", "/r/{subreddit}/sidebar", "read",
        (Param("subreddit"),), doc="Get the sidebar for a subreddit.",
    ),
    Endpoint(
        "get_user", "GET", "/user/{username}/about", "read",
        (Param("username"),), doc="Return information about a user.",
    ),
    Endpoint(
        "get_users", "GET", "/r/{subreddit}/about/{where}", "read",
        (
            Param(
                "where",
                choices=(
                    "banned", "muted", "wikibanned", "contributors",
                    "wikicontributors", "moderators",
                ),
            ),
            Param("subreddit"),
        )
        + _listing(100),
        doc="Get a list of users with a relationship to a subreddit.",
    ),
    Endpoint(
        "get_page_info", "GET", "/api/info", "read",
        (Param("url"),), doc="Return a listing of things linking to a URL.",
    ),
    Endpoint(
        "get_raw_json", "GET", "/{permalink}.json", "read",
        (Param("permalink", transform=lambda p: p.strip("/"), safe="/"),),
        doc="Get the JSON of a permalink.",
    ),
    # report
    Endpoint(
        "hide", "POST", "/api/hide", "report",
        (Param("ids", list, field="id"), _opt("state", bool, True, location="none")),
        route=_by_state("/api/hide", "/api/unhide"), check=_hide_check,
        doc="Hide (or unhide) links from the user's listings.",
    ),
    Endpoint(
        "report", "POST", "/api/report", "report",
        (Param("thing_id"), Param("reason", max_length=100)),
        api_type=True, doc="Report a link, comment or message.",
    ),
    Endpoint(
        "set_post_report_state", "POST", "/api/{state}", "report",
        (Param("id"), _opt("state", default="hide", choices=("hide", "unhide", "report"))),
        doc="Hide, unhide or report a post.",
    ),
    # save
    Endpoint(
        "save", "POST", "/api/save", "save",
        (Param("id"), _opt("state", bool, True, location="none"), _opt("category")),
        route=_by_state("/api/save", "/api/unsave"), check=_save_check, prepare=_save_prepare,
        doc="Save (or unsave) a link or comment.",
    ),
    Endpoint(
        "get_saved_categories", "GET", "/api/saved_categories", "save",
        doc="Get a list of categories in which things are currently saved.",
    ),
    # submit
    Endpoint(
        "create_story", "POST", "/api/submit", "submit",
        (
            Param("title", max_length=300),
            Param("sr"),
            Param("kind", choices=("link", "self")),
            Param("text"),
            _opt("sendreplies", bool, True),
        ),
        api_type=True, prepare=_story_prepare,
        doc="Submit a link (text is the URL) or self post (text is the body).",
    ),
    # subscribe
    Endpoint(
        "subscribe", "POST", "/api/subscribe", "subscribe",
        (Param("sr_name"), _opt("state", bool, True, location="none")),
        prepare=_subscribe_prepare, doc="Subscribe to or unsubscribe from a subreddit.",
    ),
    # vote
    Endpoint(
        "vote", "POST", "/api/vote", "vote",
        (Param("id"), _opt("dir", int, 1, choices=(-1, 0, 1))),
        doc="Cast a vote on a thing.",
    ),
)

ENDPOINTS: Dict[str, Endpoint] = {endpoint.name: endpoint for endpoint in _DEFINITIONS}
