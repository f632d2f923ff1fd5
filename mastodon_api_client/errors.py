"""Errors raised by the Mastodon API client."""

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError


class InvalidInstanceURL(ValueError):
    pass


class APIErrorBody(BaseModel):
    """JSON body the API returns alongside a non-2xx status."""

    model_config = ConfigDict(extra="ignore")

    error: str
    error_description: str | None = None


class APIError(Exception):
    """A non-2xx response whose body decoded as an API error."""

    def __init__(self, error: str, error_description: str | None = None, status: int | None = None):
        super().__init__(error)
        self.error = error
        self.error_description = error_description
        self.status = status

    def __eq__(self, other):
        if not isinstance(other, APIError):
            return NotImplemented
        return (self.error, self.error_description) == (other.error, other.error_description)

    def __hash__(self):
        return hash((self.error, self.error_description))

    def __repr__(self):
        return f"APIError(error={self.error!r}, error_description={self.error_description!r}, status={self.status!r})"


def api_error_from_response(response: httpx.Response) -> APIError | None:
    """Decode an APIError from a failed response, or None if the body is something else."""
    try:
        body = APIErrorBody.model_validate_json(response.content)
    except ValidationError:
        return None
    return APIError(body.error, body.error_description, status=response.status_code)
