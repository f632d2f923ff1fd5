"""Mastodon API entities.

Only the fields this client reads are declared; anything else in the JSON is
ignored. Timestamps arrive as ISO-8601 strings (sometimes with fractional
seconds) and are decoded to ``datetime``. Ids are strings and stay strings.
"""

from datetime import datetime
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class Entity(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Emoji(Entity):
    shortcode: str
    url: str
    static_url: str
    visible_in_picker: bool = True
    category: str | None = None


class AccountField(Entity):
    name: str
    value: str
    verified_at: datetime | None = None


class Account(Entity):
    id: str
    username: str
    acct: str
    display_name: str = ""
    locked: bool = False
    bot: bool = False
    created_at: datetime
    note: str = ""
    url: str
    avatar: str = ""
    header: str = ""
    followers_count: int = 0
    following_count: int = 0
    statuses_count: int = 0
    emojis: list[Emoji] = []
    fields: list[AccountField] = []


class Tag(Entity):
    name: str
    url: str


class Status(Entity):
    id: str
    uri: str
    url: str | None = None
    created_at: datetime
    account: Account
    content: str = ""
    visibility: str = "public"
    sensitive: bool = False
    spoiler_text: str = ""
    in_reply_to_id: str | None = None
    in_reply_to_account_id: str | None = None
    reblog: "Status | None" = None
    replies_count: int = 0
    reblogs_count: int = 0
    favourites_count: int = 0
    favourited: bool | None = None
    reblogged: bool | None = None
    emojis: list[Emoji] = []
    tags: list[Tag] = []


Status.model_rebuild()


class Notification(Entity):
    id: str
    type: str
    created_at: datetime
    account: Account
    status: Status | None = None


class Relationship(Entity):
    id: str
    following: bool = False
    followed_by: bool = False
    blocking: bool = False
    muting: bool = False
    requested: bool = False


class Instance(Entity):
    uri: str
    title: str
    description: str = ""
    short_description: str | None = None
    email: str | None = None
    version: str
    thumbnail: str | None = None
    languages: list[str] = []
    registrations: bool = False


class MastodonList(Entity):
    id: str
    title: str


class Filter(Entity):
    id: str
    phrase: str
    context: list[str]
    expires_at: datetime | None = None
    irreversible: bool = False
    whole_word: bool = False


class Preferences(Entity):
    posting_default_visibility: str = Field("public", alias="posting:default:visibility")
    posting_default_sensitive: bool = Field(False, alias="posting:default:sensitive")
    posting_default_language: str | None = Field(None, alias="posting:default:language")
    reading_expand_media: str = Field("default", alias="reading:expand:media")
    reading_expand_spoilers: bool = Field(False, alias="reading:expand:spoilers")


class Application(Entity):
    name: str
    website: str | None = None
    redirect_uri: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    vapid_key: str | None = None


class AccessToken(Entity):
    access_token: str
    token_type: str
    scope: str
    created_at: int


@lru_cache(maxsize=None)
def _adapter(result_type: Any) -> TypeAdapter:
    return TypeAdapter(result_type)


def decode(result_type: Any, content: bytes) -> Any:
    """Decode a raw JSON body as ``result_type``.

    Raises pydantic.ValidationError for invalid JSON or a shape mismatch.
    """
    return _adapter(result_type).validate_json(content)
