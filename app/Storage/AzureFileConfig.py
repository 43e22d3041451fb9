from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AzureFileConfig(BaseModel):
    """Configuration for an Azure File Storage disk."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore', frozen=True)

    container: Optional[str] = Field(None, description="Name of the file share")
    endpoint: Optional[str] = Field(None, description="Storage connection string")
    account_name: Optional[str] = Field(None, description="Storage account name")
    account_key: Optional[str] = Field(None, description="Storage account access key")
    prefix: Optional[str] = Field(None, description="Path prefix applied to every path")
    disable_recursive_delete: bool = Field(
        False,
        alias='disableRecursiveDelete',
        description="Refuse to delete directories that still have children"
    )

    def connection_string(self) -> str:
        """Get the connection string, building one from account credentials if needed."""
        if self.endpoint:
            return self.endpoint
        if self.account_name and self.account_key:
            return (
                f"DefaultEndpointsProtocol=https;AccountName={self.account_name};"
                f"AccountKey={self.account_key}"
            )
        raise ValueError("Must provide either endpoint, or account_name and account_key")
