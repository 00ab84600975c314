"""Models for the subset of the OME-XML schema used by companion files.

Schema: <https://www.openmicroscopy.org/Schemas/OME/2016-06/ome.xsd>

Only the elements and attributes needed to describe where planes live are
modeled.  Anything else found in a document is ignored when parsing.
"""

from __future__ import annotations

from typing import Annotated, ClassVar

from annotated_types import Ge
from pydantic import Field, model_validator
from typing_extensions import Self

from omecompanion._base import _BaseModel
from omecompanion._dim_order import DimensionOrder

__all__ = [  # noqa: RUF022  (don't resort, this is used for docs ordering)
    "OME",
    "Image",
    "Pixels",
    "Channel",
    "LightPath",
    "TiffData",
    "UUID",
]

PositiveInt = Annotated[int, Ge(1)]
NonNegativeInt = Annotated[int, Ge(0)]


class LightPath(_BaseModel):
    """Light path of a channel.

    Kept only so that its presence survives a round trip; the contents are
    never inspected.
    """


class Channel(_BaseModel):
    id: str = Field(alias="ID")
    samples_per_pixel: PositiveInt = Field(alias="SamplesPerPixel")
    name: str | None = Field(default=None, alias="Name")
    light_path: LightPath | None = Field(default=None, alias="LightPath")


class UUID(_BaseModel):
    """Reference to the file holding a block of planes.

    In OME-XML the UUID value is the element text and the file name an
    attribute: `<UUID FileName="z01.ome.tif">urn:uuid:...</UUID>`.
    """

    xml_text_field: ClassVar[str | None] = "value"

    file_name: str | None = Field(default=None, alias="FileName")
    value: str | None = Field(default=None, alias="Value")


class TiffData(_BaseModel):
    """Location of one or more contiguous planes in a TIFF file.

    All attributes are optional: the schema allows single-file documents to
    leave plane placement implicit.
    """

    ifd: NonNegativeInt | None = Field(
        default=None,
        alias="IFD",
        description="Index of the first IFD (page) holding these planes.",
    )
    plane_count: NonNegativeInt | None = Field(default=None, alias="PlaneCount")
    first_c: NonNegativeInt | None = Field(default=None, alias="FirstC")
    first_z: NonNegativeInt | None = Field(default=None, alias="FirstZ")
    first_t: NonNegativeInt | None = Field(default=None, alias="FirstT")
    uuid: UUID | None = Field(default=None, alias="UUID")


class Pixels(_BaseModel):
    """Shape, calibration and plane layout of an image."""

    id: str = Field(alias="ID")
    type: str = Field(alias="Type", description="Pixel type, e.g. 'uint16'.")
    size_x: PositiveInt = Field(alias="SizeX")
    size_y: PositiveInt = Field(alias="SizeY")
    size_z: PositiveInt = Field(alias="SizeZ")
    size_c: PositiveInt = Field(alias="SizeC")
    size_t: PositiveInt = Field(alias="SizeT")
    physical_size_x: float | None = Field(default=None, alias="PhysicalSizeX")
    physical_size_x_unit: str | None = Field(default=None, alias="PhysicalSizeXUnit")
    physical_size_y: float | None = Field(default=None, alias="PhysicalSizeY")
    physical_size_y_unit: str | None = Field(default=None, alias="PhysicalSizeYUnit")
    physical_size_z: float | None = Field(default=None, alias="PhysicalSizeZ")
    physical_size_z_unit: str | None = Field(default=None, alias="PhysicalSizeZUnit")
    dimension_order: DimensionOrder = Field(alias="DimensionOrder")
    significant_bits: PositiveInt | None = Field(default=None, alias="SignificantBits")
    big_endian: bool | None = Field(default=None, alias="BigEndian")
    interleaved: bool | None = Field(default=None, alias="Interleaved")

    channels: list[Channel] = Field(default_factory=list, alias="Channel")
    tiff_data: list[TiffData] = Field(default_factory=list, alias="TiffData")

    @model_validator(mode="after")
    def _validate_channel_count(self) -> Self:
        if len(self.channels) != self.size_c:
            raise ValueError(
                f"Number of Channel elements ({len(self.channels)}) does not match "
                f"SizeC ({self.size_c})."
            )
        return self

    @property
    def plane_count(self) -> int:
        """Total number of planes declared by the Z, C and T sizes."""
        return self.size_z * self.size_c * self.size_t


class Image(_BaseModel):
    id: str = Field(alias="ID")
    name: str = Field(alias="Name")
    pixels: Pixels = Field(alias="Pixels")


class OME(_BaseModel):
    """Root of an OME-XML document.

    `images` keeps declaration order.  Tools operating on "the" image of a
    document use the first entry.
    """

    images: list[Image] = Field(default_factory=list, alias="Image")
    creator: str | None = Field(default=None, alias="Creator")
