"""Request bodies and the response envelope of the local service."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from clouddrive.models import ItemKind


class NameBody(BaseModel):
    """Body of rename requests."""

    name: Optional[str] = None


class CreateFolderBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    parent_id: Optional[str] = Field(None, alias="parentId")


class TargetBody(BaseModel):
    """
    Body of move and copy requests.

    Files name their destination with folderId, folders with parentId;
    an empty value means the root.
    """

    model_config = ConfigDict(populate_by_name=True)

    folder_id: Optional[str] = Field(None, alias="folderId")
    parent_id: Optional[str] = Field(None, alias="parentId")
    name: Optional[str] = None

    def target(self, kind: ItemKind) -> Optional[str]:
        value = self.parent_id if kind is ItemKind.FOLDER else self.folder_id
        return value or None


class SuccessEnvelope(BaseModel):
    success: bool = True
    data: dict[str, Any] = Field(default_factory=dict)


class ErrorInfo(BaseModel):
    reason: str
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorEnvelope(BaseModel):
    success: bool = False
    message: str
    error: ErrorInfo
