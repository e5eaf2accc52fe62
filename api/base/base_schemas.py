# api/base/base_schemas.py
from typing import Any, Dict, Generic, Optional, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")


class BaseResponse(BaseModel, Generic[T]):
    success: bool = Field(..., description="True when the request succeeded")
    message: Optional[str] = Field(None, description="Human-friendly message")
    errors: Optional[Any] = Field(None, description="Error details")
    data: Optional[T] = Field(None, description="Payload data")

    @classmethod
    def ok(cls, data: Optional[T] = None, message: Optional[str] = None):
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, errors: Optional[Any] = None):
        return cls(success=False, message=message, errors=errors)

    def to_json(self, **extra) -> Dict[str, Any]:
        """Serialize for jsonify, merging endpoint-specific top-level keys"""
        body = self.model_dump(mode="json", exclude_none=True)
        body.update(extra)
        return body
