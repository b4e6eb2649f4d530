from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class DCMIBox:
    """A geographic bounding box in DCMI Box encoding.

    See https://www.dublincore.org/specifications/dublin-core/dcmi-box/

    Bounds are kept exactly as they were written. A box may name only some
    of its bounds; the missing ones are left out of the encoding.
    """

    UNITS: ClassVar[str] = "degrees"
    PROJECTION: ClassVar[str] = "EPSG:4326"

    north: str | None = None
    east: str | None = None
    south: str | None = None
    west: str | None = None

    def __str__(self) -> str:
        components = [
            f"{name}limit={bound}"
            for name, bound in (
                ("north", self.north),
                ("east", self.east),
                ("south", self.south),
                ("west", self.west),
            )
            if bound is not None
        ]
        components.append(f"units={self.UNITS}")
        components.append(f"projection={self.PROJECTION}")
        return "; ".join(components)
