"""
Client configuration.

There is no process-wide default endpoint: the caller owns the config and
passes it to the client it constructs.
"""
import os
import urllib.parse

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_GRAPHQL_PATH = "/api/v1/graphql"
DEFAULT_TIMEOUT = 30


class ClientConfig(BaseModel):
    """
    Connection settings for a VSC API node.

    Attributes:
        api_url: Base URL of the VSC API (e.g., "https://api.vsc.eco")
        timeout: Timeout for HTTP requests in seconds
        graphql_path: Path of the GraphQL endpoint below api_url
        allow_insecure: Permit plain http:// for non-local hosts
    """
    model_config = ConfigDict(frozen=True)

    api_url: str
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)
    graphql_path: str = DEFAULT_GRAPHQL_PATH
    allow_insecure: bool = False

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_scheme(self) -> "ClientConfig":
        parsed = urllib.parse.urlparse(self.api_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"api_url must be an http(s) URL (got: {self.api_url!r})")
        # Check if it's a localhost or 127.0.0.1 address (with or without port)
        host = parsed.netloc.split(":")[0]
        is_local = host in ("localhost", "127.0.0.1")
        if parsed.scheme != "https" and not is_local and not self.allow_insecure:
            raise ValueError(f"api_url must use https:// for security (got: {parsed.scheme}://)")
        return self

    @property
    def graphql_url(self) -> str:
        path = self.graphql_path if self.graphql_path.startswith("/") else f"/{self.graphql_path}"
        return f"{self.api_url}{path}"

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Build a config from VSC_API_URL, VSC_TIMEOUT and VSC_ALLOW_INSECURE.

        Raises:
            ValueError: If VSC_API_URL is not set or a value is invalid
        """
        api_url = os.environ.get("VSC_API_URL")
        if not api_url:
            raise ValueError("VSC_API_URL environment variable is not set")

        kwargs = {"api_url": api_url}
        timeout = os.environ.get("VSC_TIMEOUT")
        if timeout:
            kwargs["timeout"] = float(timeout)
        if os.environ.get("VSC_ALLOW_INSECURE", "").lower() in ("1", "true", "yes"):
            kwargs["allow_insecure"] = True
        return cls(**kwargs)
