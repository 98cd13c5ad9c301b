from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """The `{success, data, message?}` envelope every endpoint answers with."""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
