"""
Tool Response Envelope

Every public intent operation answers with one of two shapes:

- success: status="success", data, metadata (tool name, execution time)
- error:   status="error", error message, details (never any data)
"""

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator


class ToolMetadata(BaseModel):
    """Execution metadata attached to successful responses."""

    tool_name: str = Field(..., min_length=1, description="Name of the tool that produced the data")
    execution_time_ms: float = Field(..., ge=0.0, description="Wall-clock execution time in milliseconds")

    model_config = {"frozen": True}


class ToolResponse(BaseModel):
    """Generic success/error envelope for intent tools."""

    status: Literal["success", "error"]
    operation: str = Field(..., min_length=1, description="Operation name, e.g. 'resolve_intent'")
    data: dict[str, Any] | None = Field(None, description="Operation result (success only)")
    metadata: ToolMetadata | None = Field(None, description="Execution metadata (success only)")
    error: str | None = Field(None, description="Error message (error only)")
    details: dict[str, Any] = Field(default_factory=dict, description="Error details (error only)")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_shape(self) -> "ToolResponse":
        if self.status == "success":
            if self.data is None or self.metadata is None:
                raise ValueError("success response requires data and metadata")
            if self.error is not None:
                raise ValueError("success response must not carry an error")
        else:
            if self.data is not None:
                raise ValueError("error response must not carry partial data")
            if not self.error:
                raise ValueError("error response requires an error message")
        return self

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @classmethod
    def success(cls, operation: str, data: dict[str, Any], tool_name: str, execution_time_ms: float) -> "ToolResponse":
        return cls(
            status="success",
            operation=operation,
            data=data,
            metadata=ToolMetadata(tool_name=tool_name, execution_time_ms=execution_time_ms),
        )

    @classmethod
    def failure(cls, operation: str, error: str, details: dict[str, Any] | None = None) -> "ToolResponse":
        return cls(status="error", operation=operation, error=error, details=details or {})

    def to_dict(self) -> dict[str, Any]:
        """Drop the fields that do not belong to this envelope shape."""
        if self.ok:
            return self.model_dump(include={"status", "operation", "data", "metadata"})
        return self.model_dump(include={"status", "operation", "error", "details"})
