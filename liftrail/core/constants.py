"""
Engineering Constants for EN 81-20/50 Guide Rail Calculation
"""

from dataclasses import dataclass

# Physical Constants
GRAVITY = 9.81              # gn (m/s²)
ELASTIC_MODULUS = 2.1e5     # E for rail steel (MPa)

# Permissible Stresses (MPa)
SIGMA_PERM_SAFETY_GEAR = 205    # Safety gear operation
SIGMA_PERM_NORMAL = 165         # Normal use, running

# Permissible Deflection (mm)
DEFLECTION_PERM = 5.0

# Safety gear braking deceleration used when none is specified (× gn)
FALLBACK_BRAKE_RATIO = 0.25

# Counterweight eccentricity as a fraction of rail width/height.
# Placeholder heuristic without a normative source.
CWT_ECCENTRICITY_RATIO = 0.10

# Status thresholds on utilization
UTILIZATION_WARN = 0.85
UTILIZATION_FAIL = 1.0

# Default rail selection (car, counterweight)
DEFAULT_CAR_RAIL = "T90/A"
DEFAULT_CWT_RAIL = "T70/A"


@dataclass(frozen=True)
class Constants:
    """Physical and regulatory constants passed to every load case.

    Attributes:
        gn: Gravitational acceleration (m/s²)
        E: Elastic modulus of rail steel (MPa)
        sigma_perm_safety: Permissible stress, safety gear case (MPa)
        sigma_perm_normal: Permissible stress, normal running (MPa)
        deflection_perm: Permissible rail deflection (mm)
        fallback_brake_ratio: Braking deceleration (× gn) when a_brake is unset
        cwt_eccentricity_ratio: Assumed counterweight eccentricity (× b, × h1)
    """
    gn: float = GRAVITY
    E: float = ELASTIC_MODULUS
    sigma_perm_safety: float = SIGMA_PERM_SAFETY_GEAR
    sigma_perm_normal: float = SIGMA_PERM_NORMAL
    deflection_perm: float = DEFLECTION_PERM
    fallback_brake_ratio: float = FALLBACK_BRAKE_RATIO
    cwt_eccentricity_ratio: float = CWT_ECCENTRICITY_RATIO


DEFAULT_CONSTANTS = Constants()
