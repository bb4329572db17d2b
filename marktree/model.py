from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError


def _describe(e: PydanticValidationError) -> str:
    errs = e.errors()
    if not errs:
        return str(e)
    first = errs[0]
    loc = ".".join(str(x) for x in first.get("loc", ())) or "value"
    return f"{loc}: {first.get('msg', 'invalid')}"


class _Handle(BaseModel):
    """Caller-facing bookmark object.

    Handles are located in the live tree by object identity, never by value.
    The parent link is bound by the manager once the handle is part of the
    tree and always points at the parent *handle* (None at top level).
    """

    model_config = ConfigDict(validate_assignment=True)

    title: str = Field(min_length=1)

    _parent: Any = PrivateAttr(default=None)

    def __init__(self, title: str, **data: Any):
        try:
            super().__init__(title=title, **data)
        except PydanticValidationError as e:
            raise ValidationError(_describe(e)) from e

    @property
    def parent(self) -> Optional["BookmarkFolder"]:
        return self._parent

    def _bind_parent(self, parent: Optional["BookmarkFolder"]) -> None:
        self._parent = parent

    @property
    def is_folder(self) -> bool:
        return isinstance(self, BookmarkFolder)


class BookmarkFolder(_Handle):
    pass


class BookmarkItem(_Handle):
    url: str = Field(min_length=1)

    def __init__(self, title: str, url: str, **data: Any):
        super().__init__(title, url=url, **data)


Bookmark = Union[BookmarkFolder, BookmarkItem]


@dataclass(eq=False)
class InternalNode:
    title: str
    url: Optional[str]
    children: Optional[List["InternalNode"]]
    external: Bookmark

    @property
    def is_folder(self) -> bool:
        return self.children is not None


class StorageNode(BaseModel):
    title: str = Field(min_length=1)
    url: Optional[str] = Field(default=None, min_length=1)
    children: Optional[List["StorageNode"]] = None

    @model_validator(mode="after")
    def _folder_or_item(self) -> "StorageNode":
        if (self.url is None) == (self.children is None):
            raise ValueError("exactly one of url/children must be set")
        return self

    @property
    def is_folder(self) -> bool:
        return self.children is not None


StorageNode.model_rebuild()
