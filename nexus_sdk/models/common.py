"""Shared Pydantic models for Nexus API responses.

Nexus prefixes metadata fields with "_" and JSON-LD keys with "@"; the models
expose them under snake_case names and keep any other server field as extra.
"""

from typing import Any, Generic, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from nexus_sdk.exceptions import NexusValidationError

T = TypeVar("T")
M = TypeVar("M", bound="NexusModel")


class NexusModel(BaseModel):
    """Base for immutable views of server responses."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    @classmethod
    def from_response(cls: type[M], data: Any) -> M:
        """Build the model from a decoded response body.

        Raises:
            NexusValidationError: If the body does not have the expected shape.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise NexusValidationError(f"Unexpected {cls.__name__} response: {e}") from e

    def to_response(self) -> dict[str, Any]:
        """Dump back to the wire field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ResourceMetadata(NexusModel):
    """Metadata fields every Nexus entity carries."""

    context: Any = Field(default=None, alias="@context")
    id: str | None = Field(
        default=None,
        alias="@id",
        validation_alias=AliasChoices("@id", "_id"),
    )
    type: str | list[str] | None = Field(default=None, alias="@type")
    uuid: str | None = Field(default=None, alias="_uuid")
    rev: int | None = Field(default=None, alias="_rev")
    deprecated: bool = Field(default=False, alias="_deprecated")
    created_at: str | None = Field(default=None, alias="_createdAt")
    created_by: str | None = Field(default=None, alias="_createdBy")
    updated_at: str | None = Field(default=None, alias="_updatedAt")
    updated_by: str | None = Field(default=None, alias="_updatedBy")


class ListResponse(BaseModel):
    """Raw body of a list endpoint.

    A body with `code` set, or without `_results`, is the server's way of
    saying there is nothing to return.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    context: Any = Field(default=None, alias="@context")
    code: Any = None
    total: int = Field(default=0, alias="_total")
    results: list[dict[str, Any]] | None = Field(default=None, alias="_results")

    @property
    def is_empty(self) -> bool:
        return bool(self.code) or self.results is None

    @classmethod
    def from_response(cls, data: Any) -> "ListResponse":
        if not isinstance(data, dict):
            return cls()
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise NexusValidationError(f"Unexpected list response: {e}") from e


class PaginatedList(BaseModel, Generic[T]):
    """One page of results with the total count and starting offset."""

    total: int = 0
    index: int = 0
    results: list[T] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "PaginatedList[T]":
        return cls(total=0, index=0, results=[])
