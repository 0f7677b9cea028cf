"""Error body returned by the identity API."""

from pydantic import BaseModel, ConfigDict, Field


class ApiError(BaseModel):
    """JSON body sent alongside non-OK statuses."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    path: str = ""
    error_message: str = Field(alias="errorMessage")
