from __future__ import annotations

from typing import TYPE_CHECKING, Callable

import numpy as np
import pytest
import tifffile

if TYPE_CHECKING:
    from pathlib import Path

# ASCII only: tifffile writes ImageDescription as an ASCII tag
STACK_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<OME xmlns="http://www.openmicroscopy.org/Schemas/OME/2016-06"
     xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
     Creator="tifffile.py">
  <Image ID="Image:0" Name="stack">
    <AcquisitionDate>2024-01-01T00:00:00</AcquisitionDate>
    <Pixels ID="Pixels:0" Type="uint16" SizeX="64" SizeY="32" SizeZ="1"
            SizeC="2" SizeT="1" DimensionOrder="XYZCT"
            PhysicalSizeX="0.5" PhysicalSizeXUnit="um"
            PhysicalSizeY="0.5" PhysicalSizeYUnit="um"
            SignificantBits="16" BigEndian="false" Interleaved="false">
      <Channel ID="Channel:0:0" SamplesPerPixel="1" Name="DAPI">
        <LightPath/>
      </Channel>
      <Channel ID="Channel:0:1" SamplesPerPixel="1" Name="GFP">
        <LightPath/>
      </Channel>
      <TiffData IFD="0" PlaneCount="2"/>
      <Plane TheZ="0" TheC="0" TheT="0"/>
    </Pixels>
  </Image>
</OME>
"""


def _make_ome_xml(
    *,
    size_z: int = 1,
    size_c: int = 2,
    size_t: int = 1,
    dimension_order: str = "XYZCT",
    tiff_data: str = "",
) -> str:
    channels = "\n".join(
        f'      <Channel ID="Channel:0:{c}" SamplesPerPixel="1" Name="ch{c}">'
        "<LightPath/></Channel>"
        for c in range(size_c)
    )
    return f"""\
<OME xmlns="http://www.openmicroscopy.org/Schemas/OME/2016-06">
  <Image ID="Image:0" Name="generated">
    <Pixels ID="Pixels:0" Type="uint8" SizeX="8" SizeY="8" SizeZ="{size_z}"
            SizeC="{size_c}" SizeT="{size_t}" DimensionOrder="{dimension_order}">
{channels}
      {tiff_data}
    </Pixels>
  </Image>
</OME>
"""


@pytest.fixture
def make_ome_xml() -> Callable[..., str]:
    """Factory for minimal OME-XML documents with generated channels."""
    return _make_ome_xml


@pytest.fixture
def stack_xml() -> str:
    return STACK_XML


@pytest.fixture
def write_tiff(tmp_path: Path) -> Callable[..., Path]:
    """Write a small TIFF file, optionally with an ImageDescription."""

    def _write(description: str | None = STACK_XML, name: str = "stack.tif") -> Path:
        path = tmp_path / name
        data = np.zeros((2, 32, 64), dtype=np.uint16)
        tifffile.imwrite(path, data, description=description, metadata=None)
        return path

    return _write
