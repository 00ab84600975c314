"""Rewrite a single-file OME document as a multi-file companion document."""

from __future__ import annotations

import uuid
import warnings
from typing import Annotated

from annotated_types import Interval
from pydantic import Field, model_validator
from typing_extensions import Self

from omecompanion._base import _BaseModel
from omecompanion._dim_order import plane_index
from omecompanion._model import OME, UUID, TiffData
from omecompanion._xml import parse_ome_xml

__all__ = [
    "CompanionConfig",
    "CompanionError",
    "filename_digits",
    "to_multifile_companion",
    "to_multifile_companion_xml",
]

MAX_SIZE_Z = 999


class CompanionError(ValueError):
    """Raised when a document cannot be converted to a companion document."""


def filename_digits(size_z: int) -> int:
    """Return the zero-padding width for file numbers of a `size_z` stack.

    Numbers are 1-based, so a stack of 100 slices ends at "100" and needs
    three digits.  Stacks of fewer than ten slices still use two digits.

    Raises
    ------
    ValueError
        If `size_z` is not in [1, 999].
    """
    if 1 <= size_z <= 99:
        return 2
    if 100 <= size_z <= MAX_SIZE_Z:
        return 3
    raise ValueError(
        f"Unsupported size_z {size_z}: file numbering supports 1 to {MAX_SIZE_Z} "
        "slices."
    )


class CompanionConfig(_BaseModel):
    """How the companion document lays out its files.

    Examples
    --------
    >>> cfg = CompanionConfig(size_z=10, filename_template="stack_z{z}.ome.tif")
    >>> cfg.filename(0), cfg.filename(9)
    ('stack_z01.ome.tif', 'stack_z10.ome.tif')
    """

    size_z: Annotated[int, Interval(ge=1, le=MAX_SIZE_Z)] = Field(
        description="Number of single-slice files (new SizeZ)."
    )
    filename_template: str = Field(
        description=(
            "File name for each slice.  Every occurrence of `placeholder` is "
            "replaced by the 1-based, zero-padded slice number."
        )
    )
    physical_size_z: float = Field(
        default=1.0, description="Physical distance between slices."
    )
    physical_size_z_unit: str = Field(
        default="µm", description="Unit of `physical_size_z`."
    )
    placeholder: str = Field(default="{z}", min_length=1)
    uuids: bool = Field(
        default=False,
        description=(
            "Give every file a UUID value derived from its file name, so the "
            "same template always produces the same document."
        ),
    )

    @model_validator(mode="after")
    def _warn_missing_placeholder(self) -> Self:
        if self.placeholder not in self.filename_template:
            warnings.warn(
                f"filename_template {self.filename_template!r} does not contain "
                f"{self.placeholder!r}: every slice will reference the same file.",
                UserWarning,
                stacklevel=3,
            )
        return self

    @property
    def digits(self) -> int:
        """Zero-padding width of the slice number."""
        return filename_digits(self.size_z)

    def filename(self, z: int) -> str:
        """Return the file name of 0-based slice `z`."""
        token = f"{z + 1:0{self.digits}d}"
        return self.filename_template.replace(self.placeholder, token)

    def file_uuid(self, z: int) -> str | None:
        """Return the UUID URN of slice `z`, or None if `uuids` is off."""
        if not self.uuids:
            return None
        return uuid.uuid5(uuid.NAMESPACE_URL, self.filename(z)).urn


def to_multifile_companion(
    ome: OME, config: CompanionConfig, *, copy: bool = True
) -> OME:
    """Describe the first image of `ome` as a stack of single-slice files.

    The physical Z size is taken from `config`, every existing `TiffData`
    element is discarded, and one `TiffData` is written per (z, c) pair, with
    z in the outer loop.  The IFD of each entry is the index the plane had in
    the original single-file layout (computed with the original sizes).
    Finally SizeZ is set to `config.size_z`.

    Parameters
    ----------
    ome : OME
        The parsed single-file document.
    config : CompanionConfig
        Target layout.
    copy : bool
        If True (default), `ome` is left untouched and a modified deep copy is
        returned.  Otherwise `ome` is modified in place and returned.

    Raises
    ------
    CompanionError
        If the document has no image, or its first image has SizeT != 1.
    """
    if not ome.images:
        raise CompanionError("The OME document contains no Image to convert.")
    if ome.images[0].pixels.size_t != 1:
        raise CompanionError(
            "Only single timepoint images can be converted to a companion "
            f"document (SizeT={ome.images[0].pixels.size_t})."
        )

    if copy:
        ome = ome.model_copy(deep=True)
    pixels = ome.images[0].pixels

    pixels.physical_size_z = config.physical_size_z
    pixels.physical_size_z_unit = config.physical_size_z_unit

    tiff_data: list[TiffData] = []
    for z in range(config.size_z):
        for c in range(len(pixels.channels)):
            ifd = plane_index(pixels, z=z, c=c, t=0)
            tiff_data.append(
                TiffData(
                    ifd=ifd,
                    plane_count=1,
                    first_c=c,
                    first_z=z,
                    first_t=0,
                    uuid=UUID(file_name=config.filename(z), value=config.file_uuid(z)),
                )
            )
    pixels.tiff_data = tiff_data
    pixels.size_z = config.size_z
    return ome


def to_multifile_companion_xml(text: str | bytes, config: CompanionConfig) -> OME:
    """Parse OME-XML `text` and convert it with `to_multifile_companion`."""
    return to_multifile_companion(parse_ome_xml(text), config, copy=False)
