"""Response models handed to the addon transport layer."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ProxyHeaders(_WireModel):
    request: dict[str, str]


class BehaviorHints(_WireModel):
    binge_group: Optional[str] = Field(None, alias="bingeGroup")
    not_web_ready: Optional[bool] = Field(None, alias="notWebReady")
    proxy_headers: Optional[ProxyHeaders] = Field(None, alias="proxyHeaders")
    video_size: Optional[int] = Field(None, alias="videoSize")
    filename: Optional[str] = None


class StreamEntry(_WireModel):
    """One stream as listed by the client."""

    url: Optional[str] = None
    external_url: Optional[str] = Field(None, alias="externalUrl")
    yt_id: Optional[str] = Field(None, alias="ytId")
    name: str
    title: str
    type: Optional[str] = None
    behavior_hints: Optional[BehaviorHints] = Field(None, alias="behaviorHints")
    quality: Optional[str] = None
    resolution: Optional[str] = None


class ResolveResponse(_WireModel):
    """
    Result of one resolve call.

    ``ttl`` is the recommended cache lifetime in milliseconds; ``None``
    means the response must not be cached.
    """

    streams: list[StreamEntry] = Field(default_factory=list)
    ttl: Optional[int] = None
