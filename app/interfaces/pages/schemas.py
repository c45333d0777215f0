"""
Pydantic schemas for pages API request/response validation.

Slug, title and position rules are enforced by the domain so the
French validation messages reach the client unchanged.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class CreatePageRequest(BaseModel):
    slug: str
    title: str
    description: Optional[str] = None
    template_id: Optional[str] = None


class UpdatePageSettingsRequest(BaseModel):
    """Only the fields that are sent are changed."""

    title: Optional[str] = None
    description: Optional[str] = None
    slug: Optional[str] = None


class AddSectionRequest(BaseModel):
    type: str = Field(..., description="HERO, ABOUT, PRODUCTS_GRID, ...")
    title: str = ""
    content: dict[str, Any] = Field(default_factory=dict)
    position: Optional[int] = Field(None, description="Defaults to the end of the page")


class UpdateSectionRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[dict[str, Any]] = None
    is_visible: Optional[bool] = None


class ReorderSectionsRequest(BaseModel):
    section_ids: list[str]


class SectionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: str
    title: str
    content: dict[str, Any]
    position: int
    is_visible: bool


class PageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    creator_id: str
    slug: str
    title: str
    description: Optional[str] = None
    template_id: Optional[str] = None
    status: str
    sections: list[SectionResponse]
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class PublicPageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    slug: str
    title: str
    description: Optional[str] = None
    sections: list[SectionResponse]
    published_at: Optional[datetime] = None


class ReorderSectionsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    page_id: str
    section_ids: list[str]
