import os

import tifffile

__all__ = ["ImageDescriptionNotFoundError", "read_image_description"]


class ImageDescriptionNotFoundError(LookupError):
    """Raised when a TIFF file has no (or an empty) ImageDescription tag."""


def read_image_description(path: str | os.PathLike) -> str:
    """Return the ImageDescription tag of the first page of a TIFF file.

    For OME-TIFF files this is the embedded OME-XML document.

    Parameters
    ----------
    path : str or os.PathLike
        Path to the TIFF file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    tifffile.TiffFileError
        If the file is not a TIFF file.
    ImageDescriptionNotFoundError
        If the first page has no ImageDescription tag.
    """
    with tifffile.TiffFile(path) as tif:
        description = tif.pages.first.description
    if not description:
        raise ImageDescriptionNotFoundError(
            f"No ImageDescription tag found in {os.fspath(path)!r}"
        )
    return description
