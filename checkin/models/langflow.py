"""
Langflow API models.
"""
from typing import Any, Literal, Optional
from pydantic import BaseModel


class LangflowRunRequest(BaseModel):
    """Body posted to a Langflow flow run."""
    input_value: str
    output_type: Literal["chat"] = "chat"
    input_type: Literal["chat"] = "chat"
    session_id: str


class RelayResult(BaseModel):
    """Outcome of relaying a transcript to Langflow. Never stored."""
    success: bool
    response: Optional[Any] = None
    extracted_message: Optional[str] = None
    error: Optional[str] = None

    @property
    def message_length(self) -> int:
        return len(self.extracted_message) if self.extracted_message else 0


class LangflowApiStatus(BaseModel):
    """The langflow_api block returned to callers."""
    success: bool
    error: Optional[str] = None
    response_received: bool = False
    extracted_message: Optional[str] = None
    message_length: int = 0

    @classmethod
    def from_result(cls, result: RelayResult) -> "LangflowApiStatus":
        return cls(
            success=result.success,
            error=result.error,
            response_received=result.response is not None,
            extracted_message=result.extracted_message,
            message_length=result.message_length,
        )
