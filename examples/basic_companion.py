# /// script
# requires-python = ">=3.10"
# dependencies = [
#     "omecompanion",
#     "rich",
# ]
#
# [tool.uv.sources]
# omecompanion = { path = "../", editable = true }
# ///
"""Build a two-channel image model and write its multi-file companion OME-XML."""

from omecompanion import (
    OME,
    Channel,
    CompanionConfig,
    Image,
    LightPath,
    Pixels,
    to_multifile_companion,
    to_ome_xml,
)

try:
    from rich import print
except ImportError:
    pass

ome = OME(
    images=[
        Image(
            id="Image:0",
            name="My Stack",
            pixels=Pixels(
                id="Pixels:0",
                type="uint16",
                size_x=512,
                size_y=512,
                size_z=1,
                size_c=2,
                size_t=1,
                dimension_order="XYZCT",
                physical_size_x=0.5,
                physical_size_x_unit="µm",
                physical_size_y=0.5,
                physical_size_y_unit="µm",
                channels=[
                    Channel(
                        id="Channel:0:0",
                        samples_per_pixel=1,
                        name="DAPI",
                        light_path=LightPath(),
                    ),
                    Channel(
                        id="Channel:0:1",
                        samples_per_pixel=1,
                        name="GFP",
                        light_path=LightPath(),
                    ),
                ],
            ),
        )
    ]
)

config = CompanionConfig(
    size_z=25,
    filename_template="my_stack_z{z}.ome.tif",
    physical_size_z=2.0,
    physical_size_z_unit="µm",
)

print(to_ome_xml(to_multifile_companion(ome, config)))
