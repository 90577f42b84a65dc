from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Document(BaseModel):
    """
    A unit of content plus metadata flowing through a pipeline.

    Instances are frozen and ``metadata`` is a read-only mapping: stages
    derive new documents with ``clone`` instead of editing them, so a document
    can be shared between pipelines and pages.
    """

    model_config = ConfigDict(frozen=True)

    source: str = Field("", description="Where the document came from (file path or logical id)")
    content: str = Field("", description="The document body")
    metadata: Mapping[str, Any] = Field(
        default_factory=dict,
        validate_default=True,
        description="Arbitrary key/value metadata",
    )

    # metadata values may be unhashable
    __hash__ = None  # type: ignore[assignment]

    @field_validator("metadata", mode="after")
    @classmethod
    def freeze_metadata(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(v))

    def clone(self, overlay: Optional[Mapping[str, Any]] = None, *, content: Optional[str] = None) -> Document:
        """Return a new document with ``overlay`` merged on top of the metadata.

        Keys in ``overlay`` win on collision; every other key keeps the very
        same value object. ``self`` is left untouched.
        """
        update: Dict[str, Any] = {"metadata": MappingProxyType({**self.metadata, **(overlay or {})})}
        if content is not None:
            update["content"] = content
        return self.model_copy(update=update)

    def get(self, key: str, default: Any = None) -> Any:
        return self.metadata.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.metadata[key]

    def __contains__(self, key: object) -> bool:
        return key in self.metadata

    def keys(self) -> Iterator[str]:
        return iter(self.metadata)
