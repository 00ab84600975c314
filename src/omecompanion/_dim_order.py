"""Dimension orders and linear plane indices."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, overload

if TYPE_CHECKING:
    from omecompanion._model import Pixels

__all__ = ["DimensionOrder", "InvalidDimensionOrderError", "plane_index"]


class InvalidDimensionOrderError(ValueError):
    """Raised when a string is not one of the six OME dimension orders."""


class DimensionOrder(str, Enum):
    """Order in which planes are stored, fastest varying axis first.

    X and Y are always the two innermost (pixel) axes, so only the last three
    letters take part in the linear plane index.
    """

    XYZCT = "XYZCT"
    XYZTC = "XYZTC"
    XYCTZ = "XYCTZ"
    XYCZT = "XYCZT"
    XYTCZ = "XYTCZ"
    XYTZC = "XYTZC"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | DimensionOrder) -> DimensionOrder:
        """Return the member for `value`, or raise `InvalidDimensionOrderError`."""
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise InvalidDimensionOrderError(
                f"Invalid dimension order {value!r}. Must be one of: {valid}"
            ) from None

    @property
    def axes(self) -> tuple[str, str, str]:
        """The non-XY axes, from fastest to slowest varying."""
        a, b, c = self.value[2:]
        return a, b, c

    def plane_index(
        self, z: int, c: int, t: int, *, size_z: int, size_c: int, size_t: int
    ) -> int:
        """Return the position of plane (z, c, t) in the linear plane sequence.

        Parameters
        ----------
        z, c, t : int
            0-based depth, channel and time indices.  They are not checked
            against the sizes.
        size_z, size_c, size_t : int
            Declared sizes of the depth, channel and time axes.

        Examples
        --------
        >>> DimensionOrder.XYZCT.plane_index(1, 2, 0, size_z=2, size_c=3, size_t=1)
        5
        """
        if self is DimensionOrder.XYZCT:
            return z + size_z * c + size_z * size_c * t
        if self is DimensionOrder.XYZTC:
            return z + size_z * t + size_z * size_t * c
        if self is DimensionOrder.XYCTZ:
            return c + size_c * t + size_c * size_t * z
        if self is DimensionOrder.XYCZT:
            return c + size_c * z + size_c * size_z * t
        if self is DimensionOrder.XYTCZ:
            return t + size_t * c + size_t * size_c * z
        if self is DimensionOrder.XYTZC:
            return t + size_t * z + size_t * size_z * c
        raise InvalidDimensionOrderError(  # pragma: no cover
            f"Unhandled dimension order {self.value!r}"
        )


@overload
def plane_index(pixels: Pixels, /, *, z: int, c: int, t: int = 0) -> int: ...
@overload
def plane_index(
    order: str | DimensionOrder,
    /,
    *,
    z: int,
    c: int,
    t: int = 0,
    size_z: int,
    size_c: int,
    size_t: int,
) -> int: ...
def plane_index(
    source: Pixels | str | DimensionOrder,
    /,
    *,
    z: int,
    c: int,
    t: int = 0,
    size_z: int | None = None,
    size_c: int | None = None,
    size_t: int | None = None,
) -> int:
    """Return the linear plane index of (z, c, t).

    `source` is either a `Pixels` model, whose sizes and dimension order are
    used, or a dimension order string, in which case all three sizes must be
    given.

    Raises
    ------
    InvalidDimensionOrderError
        If `source` is a string that is not a valid dimension order.
    """
    if isinstance(source, (str, DimensionOrder)):
        order = DimensionOrder.parse(source)
        if size_z is None or size_c is None or size_t is None:
            raise TypeError(
                "size_z, size_c and size_t are required when passing a "
                "dimension order string."
            )
    else:
        order = DimensionOrder.parse(source.dimension_order)
        size_z, size_c, size_t = source.size_z, source.size_c, source.size_t
    return order.plane_index(z, c, t, size_z=size_z, size_c=size_c, size_t=size_t)
