import pytest
from pydantic import ValidationError

from omecompanion import UUID, Channel, Pixels, TiffData

PIXELS = {
    "ID": "Pixels:0",
    "Type": "uint8",
    "SizeX": 4,
    "SizeY": 4,
    "SizeZ": 1,
    "SizeC": 1,
    "SizeT": 1,
    "DimensionOrder": "XYZCT",
    "Channel": [{"ID": "Channel:0:0", "SamplesPerPixel": 1}],
}


def test_populate_by_alias_or_name() -> None:
    by_alias = TiffData.model_validate({"IFD": 2, "UUID": {"FileName": "a.tif"}})
    by_name = TiffData(ifd=2, uuid=UUID(file_name="a.tif"))
    assert by_alias == by_name


def test_extra_attributes_ignored() -> None:
    channel = Channel.model_validate(
        {"ID": "Channel:0:0", "SamplesPerPixel": 1, "Color": "-1"}
    )
    assert not hasattr(channel, "Color")
    assert channel.model_extra is None


def test_assignment_is_validated() -> None:
    pixels = Pixels.model_validate(PIXELS)
    with pytest.raises(ValidationError, match="greater than or equal to 1"):
        pixels.size_z = 0
    with pytest.raises(ValidationError, match="does not match SizeC"):
        pixels.size_c = 2
