# =============================================================================
# TELEWIND - COMPASS SECTOR
# =============================================================================
#
# A Sector is a clockwise arc of the compass given by two bearings.
# Sector(270, 90) is the northern half circle, Sector(90, 270) the southern.
# Both ends are inclusive. Arcs with from > to wrap through 0°.
#
# =============================================================================

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Sector:
    """Clockwise circle sector from `start` to `end` (degrees, inclusive)."""
    start: int
    end: int

    def __post_init__(self):
        for bound in (self.start, self.end):
            if not 0 <= bound < 360:
                raise ValueError(f"Sector bound out of range [0, 360): {bound}")

    def test(self, angle: int) -> bool:
        """Check if a bearing falls inside the sector. Any integer is accepted."""
        angle = angle % 360
        if self.start <= self.end:
            return self.start <= angle <= self.end
        return self.start <= angle or angle <= self.end

    def __contains__(self, angle: int) -> bool:
        return self.test(angle)

    @classmethod
    def from_name(cls, name: str) -> "Sector":
        """
        Resolve a named sector constant.

        Args:
            name: Constant name, e.g. "north_180" or "EAST_90"

        Returns:
            The matching Sector

        Raises:
            ValueError: If no sector has that name
        """
        key = name.strip().upper()
        if key not in NAMED_SECTORS:
            known = ", ".join(sorted(NAMED_SECTORS))
            raise ValueError(f"Unknown sector '{name}'. Known sectors: {known}")
        return NAMED_SECTORS[key]


Sector.NORTH_180 = Sector(270, 90)
Sector.SOUTH_180 = Sector(90, 270)
Sector.EAST_180 = Sector(0, 180)
Sector.WEST_180 = Sector(180, 0)

Sector.NORTH_90 = Sector(315, 45)
Sector.EAST_90 = Sector(45, 135)
Sector.SOUTH_90 = Sector(135, 225)
Sector.WEST_90 = Sector(225, 315)

NAMED_SECTORS: Dict[str, Sector] = {
    "NORTH_180": Sector.NORTH_180,
    "SOUTH_180": Sector.SOUTH_180,
    "EAST_180": Sector.EAST_180,
    "WEST_180": Sector.WEST_180,
    "NORTH_90": Sector.NORTH_90,
    "EAST_90": Sector.EAST_90,
    "SOUTH_90": Sector.SOUTH_90,
    "WEST_90": Sector.WEST_90,
}
