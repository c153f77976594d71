"""
Guide Rail Profile Catalog (ISO 7465 machined T-rails)
"""

from types import MappingProxyType
from typing import List, Mapping, Tuple

from .data_models import RailProperties
from .exceptions import ConfigurationError


_RAILS: Tuple[RailProperties, ...] = (
    # name, area, weight, b, h1, k, n, c, Ix, Iy, Wx, Wy, ix, iy
    RailProperties("T45/A", 425, 3.34, 45, 45, 5, 5, 5,
                   80_800, 38_300, 2_530, 1_700, 13.79, 9.49),
    RailProperties("T50/A", 475, 3.73, 50, 40, 5, 5, 5,
                   112_000, 52_400, 3_640, 2_096, 15.36, 10.50),
    RailProperties("T70/A", 940, 7.379, 65, 65, 6, 8, 5,
                   406_500, 188_600, 9_169, 5_389, 20.87, 14.17),
    RailProperties("T75/A", 1100, 8.64, 75, 62, 9, 10, 7,
                   593_000, 264_000, 13_180, 7_040, 23.22, 15.49),
    RailProperties("T82/A", 1090, 8.55, 82.5, 68.25, 9, 7.5, 6,
                   498_000, 302_000, 11_070, 7_320, 21.37, 16.65),
    RailProperties("T89/A", 1570, 12.33, 89, 62, 16, 10, 7.9,
                   595_000, 525_000, 14_450, 11_800, 19.47, 18.29),
    RailProperties("T90/A", 1725, 13.54, 75, 65, 10, 10, 8,
                   1_020_000, 524_800, 20_860, 11_660, 24.31, 17.44),
    RailProperties("T114/A", 2160, 16.96, 114, 89, 16, 12.7, 8.5,
                   1_870_000, 1_080_000, 29_700, 18_950, 29.42, 22.36),
    RailProperties("T125/B", 2320, 18.2, 125, 82, 16, 16, 10,
                   2_000_000, 1_000_000, 30_000, 15_000, 29.36, 20.76),
    RailProperties("T127-1/B", 2250, 17.66, 127, 88.9, 15.88, 12.7, 10.32,
                   2_000_000, 1_500_000, 30_700, 23_620, 29.81, 25.82),
    RailProperties("T140-1/B", 3450, 27.08, 140, 108, 19, 15.9, 12.7,
                   4_050_000, 2_380_000, 51_000, 34_000, 34.26, 26.27),
)

# Read-only catalog keyed by profile name
RAIL_CATALOG: Mapping[str, RailProperties] = MappingProxyType(
    {rail.name: rail for rail in _RAILS}
)

_CATALOG_KEYS = MappingProxyType({name.upper(): name for name in RAIL_CATALOG})


def lookup_rail(name: str) -> RailProperties:
    """Get rail properties by profile name (case-insensitive).

    Raises:
        ConfigurationError: If the profile is not in the catalog
    """
    key = str(name).strip().upper()
    if key in _CATALOG_KEYS:
        return RAIL_CATALOG[_CATALOG_KEYS[key]]
    raise ConfigurationError(
        f"Rail profile '{name}' not found in catalog. "
        f"Available: {', '.join(RAIL_CATALOG)}",
        name=name,
    )


def list_rails() -> List[RailProperties]:
    """All catalog profiles in catalog order"""
    return list(_RAILS)


def rail_names() -> List[str]:
    return [rail.name for rail in list_rails()]
