"""Domain models for build and directory configuration."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, JsonValue, field_validator, model_validator


def _fold_key(key: str) -> str:
    return key.replace("_", "").lower()


class FoldedModel(BaseModel):
    """Frozen model whose JSON keys match field names case-insensitively.

    ``AutoThumbnail``, ``autoThumbnail`` and ``auto_thumbnail`` all populate
    the ``auto_thumbnail`` field.
    """

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        names = {_fold_key(name): name for name in cls.model_fields}
        return {
            names.get(_fold_key(key), key) if isinstance(key, str) else key: item
            for key, item in value.items()
        }


class ThumbnailMethod(str, Enum):
    """Sizing strategy for a thumbnail derivative."""

    RESIZE = "resize"
    FIT = "fit"
    FILL = "fill"
    THUMBNAIL = "thumbnail"


class ResampleFilter(str, Enum):
    """Resampling filter used when scaling images."""

    NEAREST = "nearest"
    BOX = "box"
    BILINEAR = "bilinear"
    HAMMING = "hamming"
    BICUBIC = "bicubic"
    LANCZOS = "lanczos"


class ThumbnailSpec(FoldedModel):
    """How to derive a thumbnail from a source image."""

    method: ThumbnailMethod = Field(
        default=ThumbnailMethod.THUMBNAIL, description="Sizing strategy"
    )
    width: int = Field(..., gt=0, description="Target width in pixels")
    height: int = Field(..., gt=0, description="Target height in pixels")
    filter: ResampleFilter = Field(
        default=ResampleFilter.BOX, description="Resampling filter"
    )

    @field_validator("method", mode="before")
    @classmethod
    def _coerce_method(cls, value: Any) -> ThumbnailMethod:
        # Unknown strategies fall back to the default
        if isinstance(value, ThumbnailMethod):
            return value
        try:
            return ThumbnailMethod(str(value or "").strip().lower())
        except ValueError:
            return ThumbnailMethod.THUMBNAIL

    @field_validator("filter", mode="before")
    @classmethod
    def _lower_filter(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class FileConfig(FoldedModel):
    """Per-file settings from a directory configuration file."""

    template: str = Field(default="", description="Template file name")
    data: JsonValue = Field(default=None, description="Payload passed to templates")
    auto_thumbnail: dict[str, ThumbnailSpec] = Field(
        default_factory=dict,
        description="Image subdirectory to thumbnail spec (static entry only)",
    )

    @field_validator("template", mode="before")
    @classmethod
    def _null_template(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("auto_thumbnail", mode="before")
    @classmethod
    def _null_thumbnails(cls, value: Any) -> Any:
        return {} if value is None else value


DirectoryConfig = Mapping[str, FileConfig]

DEFAULT_DIRECTORY_CONFIG: DirectoryConfig = MappingProxyType({})
DEFAULT_FILE_CONFIG = FileConfig()


class BuildConfig(FoldedModel):
    """Process-wide build configuration loaded from the master file."""

    output: Path = Field(..., description="Output directory")
    port: int | None = Field(
        default=None, gt=0, description="Historical HTTP port, superseded by --port"
    )
    preserve: tuple[str, ...] = Field(
        default=(), description="Extra output entries protected from clearing"
    )

    @field_validator("output", mode="before")
    @classmethod
    def _require_output(cls, value: Any) -> Any:
        if value is None or not str(value).strip():
            raise ValueError("output directory unset in configuration")
        return value


class DirectoryEntry(BaseModel):
    """A single entry returned by the ``readdir`` template function."""

    name: str
    size: int
    mode: int
    mod_time: dt.datetime
    is_dir: bool
