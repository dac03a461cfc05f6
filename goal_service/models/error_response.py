"""
Error response model shared by both services.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.
"""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """
    Error body returned for every failed request.

    Only a human-readable message is exposed; codes and internal details
    stay in the server logs.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": '"title" length must be at least 3 characters long',
            }
        }
    )

    error: str = Field(
        ...,
        description="User-friendly error message",
        json_schema_extra={"example": "Health goal not found"},
    )
