"""Uniform JSON response envelope."""

from typing import Any

from pydantic import BaseModel

from psiproxy.schemas.common import ResponseCode


class ResponseEnvelope(BaseModel):
    """Every /psi response body, success or failure."""

    code: ResponseCode
    data: Any = None
    message: str | None = None

    @classmethod
    def success(cls, data: Any) -> "ResponseEnvelope":
        return cls(code=ResponseCode.SUCCESS, data=data)

    @classmethod
    def failure(cls, message: str, data: dict[str, Any] | None = None) -> "ResponseEnvelope":
        return cls(code=ResponseCode.FAILURE, message=message, data=data)

    def to_content(self) -> dict[str, Any]:
        """
        Build the JSON body, omitting absent members.

        ``data`` is passed through as-is so that null values inside a raw
        upstream report survive.
        """
        content: dict[str, Any] = {"code": int(self.code)}
        if self.data is not None:
            content["data"] = self.data
        if self.message is not None:
            content["message"] = self.message
        return content
