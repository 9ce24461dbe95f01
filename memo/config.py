import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field


DEFAULT_USER_AGENT = "memo/0.1"

# Environment variable -> Settings field
ENV_VARS = {
    "MEMO_HTTP_TIMEOUT": "http_timeout",
    "MEMO_USER_AGENT": "user_agent",
}


class Settings(BaseModel):
    http_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for a single HTTP fetch.",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header sent by the HTTP fetcher.",
    )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Builds Settings from MEMO_* environment variables, falling back to the
    defaults for anything unset. Raises pydantic.ValidationError on bad values.
    """
    if environ is None:
        environ = os.environ
    raw = {field: environ[var] for var, field in ENV_VARS.items() if var in environ}
    return Settings(**raw)

