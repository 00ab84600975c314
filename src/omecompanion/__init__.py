"""Write multi-file companion OME-XML for single-file OME-TIFF stacks."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("omecompanion")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "uninstalled"

from ._companion import (
    CompanionConfig,
    CompanionError,
    filename_digits,
    to_multifile_companion,
    to_multifile_companion_xml,
)
from ._dim_order import DimensionOrder, InvalidDimensionOrderError, plane_index
from ._model import OME, UUID, Channel, Image, LightPath, Pixels, TiffData
from ._tiff import ImageDescriptionNotFoundError, read_image_description
from ._xml import parse_ome_xml, pretty_xml, to_ome_xml

__all__ = [
    "OME",
    "UUID",
    "Channel",
    "CompanionConfig",
    "CompanionError",
    "DimensionOrder",
    "Image",
    "ImageDescriptionNotFoundError",
    "InvalidDimensionOrderError",
    "LightPath",
    "Pixels",
    "TiffData",
    "filename_digits",
    "parse_ome_xml",
    "plane_index",
    "pretty_xml",
    "read_image_description",
    "to_multifile_companion",
    "to_multifile_companion_xml",
    "to_ome_xml",
]
