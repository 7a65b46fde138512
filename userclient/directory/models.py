"""
User directory wire models.

Single-user envelope:  {"data": {"id": 1, "first_name": ..., "avatar": ...}}
Paginated envelope:    {"page": 1, "total_pages": 2, "data": [{...}, ...]}

Unknown keys (reqres also sends "support", "per_page", ...) are ignored.
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from userclient.services.errors import ParseError


class User(BaseModel):
    """A user record from the directory."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    first_name: str
    last_name: str
    email: str
    avatar_url: str = Field(alias="avatar")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class UserEnvelope(BaseModel):
    """Response body of GET /users/{id}."""

    data: User


class UserPage(BaseModel):
    """One page of GET /users?page={n}."""

    # Missing counters read as 0, which ends the traversal
    page: int = 0
    total_pages: int = 0
    data: list[User]


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "body"
    return f"{location}: {first['msg']}"


def parse_user(body: str, user_id: int | None = None) -> User:
    """Parse a single-user envelope, raising ParseError on any mismatch."""
    try:
        return UserEnvelope.model_validate_json(body).data
    except ValidationError as e:
        target = f"user {user_id}" if user_id is not None else "user"
        raise ParseError(
            f"Failed to parse {target} response ({_describe(e)})",
            operation="get_user_by_id",
        ) from e


def parse_user_page(body: str, page: int | None = None) -> UserPage:
    """Parse a paginated envelope, raising ParseError on any mismatch."""
    try:
        return UserPage.model_validate_json(body)
    except ValidationError as e:
        target = f"page {page}" if page is not None else "page"
        raise ParseError(
            f"Failed to parse users {target} response ({_describe(e)})",
            operation="get_all_users",
        ) from e
