"""
Data Models for LiftRail - Elevator Guide Rail Calculation Platform
"""

from dataclasses import dataclass, field, fields, asdict
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple, Union

from .constants import DEFAULT_CAR_RAIL, DEFAULT_CWT_RAIL


class LoadCase(Enum):
    """Rail load cases"""
    SAFETY_GEAR = "safety_gear"        # Car rail, safety gear operation
    NORMAL = "normal"                  # Car rail, normal running
    COUNTERWEIGHT = "counterweight"    # Counterweight rail

    @property
    def label(self) -> str:
        return LOAD_CASE_LABELS[self]


LOAD_CASE_LABELS = {
    LoadCase.SAFETY_GEAR: "Car - Safety Gear Operation",
    LoadCase.NORMAL: "Car - Normal Running",
    LoadCase.COUNTERWEIGHT: "Counterweight",
}


@dataclass(frozen=True)
class RailProperties:
    """Cross-section properties of a guide rail profile.

    Section moduli are catalog values and are not re-derived from the
    second moments of area.

    Attributes:
        name: Profile designation (e.g. "T90/A")
        area: Cross-sectional area (mm²)
        weight: Linear mass (kg/m)
        b: Foot width (mm)
        h1: Profile height (mm)
        k: Blade width (mm)
        n: Blade height (mm)
        c: Flange thickness at blade (mm)
        Ix: Second moment of area about X-X (mm⁴)
        Iy: Second moment of area about Y-Y (mm⁴)
        Wx: Section modulus about X-X (mm³)
        Wy: Section modulus about Y-Y (mm³)
        ix: Radius of gyration about X-X (mm)
        iy: Radius of gyration about Y-Y (mm)
    """
    name: str
    area: float
    weight: float
    b: float
    h1: float
    k: float
    n: float
    c: float
    Ix: float
    Iy: float
    Wx: float
    Wy: float
    ix: float
    iy: float

    @property
    def label(self) -> str:
        """Selector label, e.g. 'T90/A (13.54 kg/m)'"""
        return f"{self.name} ({self.weight} kg/m)"


@dataclass
class SystemInputs:
    """Lift installation inputs"""
    # Masses (kg)
    P: float = 1100.0        # Empty car mass
    Q: float = 800.0         # Rated load
    Mot: float = 300.0       # Motor / accessory mass
    Mctw: float = 1500.0     # Counterweight mass

    # Dynamics
    v_rated: float = 1.0     # Rated speed (m/s)
    a_brake: float = 0.0     # Safety gear braking deceleration (× gn), 0 = unset

    # Geometry (mm)
    L: float = 2500.0        # Distance between rail brackets
    h_k: float = 3300.0      # Vertical distance between car guide shoes
    h_ctw: float = 3000.0    # Vertical distance between counterweight guide shoes
    n_rails: int = 2         # Number of guide rails

    # Car load eccentricities (mm)
    Xp: float = 75.0         # Empty car, X
    Yp: float = 10.0         # Empty car, Y
    Xq: float = 187.5        # Rated load, X
    Yq: float = 162.5        # Rated load, Y

    # Guide shoe offsets (mm)
    xi: float = 800.0
    yi: float = 100.0

    # Safety gear factors
    k1: float = 2.0          # Impact factor
    k2: float = 1.2
    k3: float = 1.2

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        """Names of all input fields in declaration order"""
        return tuple(f.name for f in fields(cls))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


INPUT_UNITS = {
    "P": "kg", "Q": "kg", "Mot": "kg", "Mctw": "kg",
    "v_rated": "m/s", "a_brake": "gn",
    "L": "mm", "h_k": "mm", "h_ctw": "mm", "n_rails": "-",
    "Xp": "mm", "Yp": "mm", "Xq": "mm", "Yq": "mm",
    "xi": "mm", "yi": "mm",
    "k1": "-", "k2": "-", "k3": "-",
}

INPUT_LABELS = {
    "P": "Empty car mass (P)",
    "Q": "Rated load (Q)",
    "Mot": "Motor / accessories (Mot)",
    "Mctw": "Counterweight mass (Mctw)",
    "v_rated": "Rated speed (v)",
    "a_brake": "Braking deceleration (a)",
    "L": "Bracket distance (L)",
    "h_k": "Car guide shoe distance (h)",
    "h_ctw": "CWT guide shoe distance (h_ctw)",
    "n_rails": "Number of rails (n)",
    "Xp": "Car eccentricity Xp",
    "Yp": "Car eccentricity Yp",
    "Xq": "Load eccentricity Xq",
    "Yq": "Load eccentricity Yq",
    "xi": "Guide shoe offset xi",
    "yi": "Guide shoe offset yi",
    "k1": "Impact factor (k1)",
    "k2": "Factor k2",
    "k3": "Factor k3",
}


@dataclass(frozen=True)
class CalculationResult:
    """Forces, moments, stresses and stability values of one load case.

    Fields that do not apply to a load case are zero.
    """
    force_fx: float = 0.0           # N (lateral)
    force_fy: float = 0.0           # N (guide)
    moment_mx: float = 0.0          # Nmm
    moment_my: float = 0.0          # Nmm
    sigma_x: float = 0.0            # MPa
    sigma_y: float = 0.0            # MPa
    sigma_m: float = 0.0            # MPa (sigma_x + sigma_y)
    deflection_x: float = 0.0       # mm
    deflection_y: float = 0.0       # mm
    slenderness: float = 0.0        # λ
    omega: float = 0.0              # ω
    sigma_buckling: float = 0.0     # MPa

    @property
    def max_deflection(self) -> float:
        return max(self.deflection_x, self.deflection_y)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class DesignResult:
    """Base class for design results"""
    element_type: str
    size: str
    utilization: float = 0.0
    status: str = "OK"
    warnings: List[str] = field(default_factory=list)
    calculations: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class RailCheck(DesignResult):
    """Load case result checked against the permissible limits"""
    load_case: LoadCase = LoadCase.NORMAL
    result: CalculationResult = field(default_factory=CalculationResult)
    stress_limit: float = 0.0                   # MPa
    stress_utilization: float = 0.0
    deflection_limit: Optional[float] = None    # mm, None if not checked
    deflection_utilization: float = 0.0
    buckling_utilization: float = 0.0

    @property
    def rail_name(self) -> str:
        return self.size

    @property
    def passed(self) -> bool:
        return self.status != "FAIL"


@dataclass
class ProjectMetadata:
    """Report cover data"""
    project_name: str = "Untitled Project"
    customer: str = ""
    order_number: str = ""
    author: str = ""
    date: str = ""


CustomInputs = Dict[str, Union[float, str]]


@dataclass
class RailProject:
    """
    Central data class for all project inputs and results.
    This is the main interface for the LiftRail platform.
    """
    metadata: ProjectMetadata = field(default_factory=ProjectMetadata)

    # Input data
    inputs: SystemInputs = field(default_factory=SystemInputs)
    car_rail: str = DEFAULT_CAR_RAIL
    cwt_rail: str = DEFAULT_CWT_RAIL
    custom_inputs: CustomInputs = field(default_factory=dict)

    # Results (populated by run_analysis)
    safety_gear_check: Optional[RailCheck] = None
    normal_check: Optional[RailCheck] = None
    counterweight_check: Optional[RailCheck] = None

    # Advisory commentary (populated by the AI service)
    ai_review: str = ""

    @property
    def checks(self) -> List[RailCheck]:
        """All available results in load case order"""
        return [
            c for c in (self.safety_gear_check, self.normal_check, self.counterweight_check)
            if c is not None
        ]

    @property
    def has_results(self) -> bool:
        return len(self.checks) == 3

    @property
    def overall_status(self) -> str:
        if not self.has_results:
            return "PENDING"
        if any(not c.passed for c in self.checks):
            return "FAIL"
        return "OK"

    def clear_results(self) -> None:
        self.safety_gear_check = None
        self.normal_check = None
        self.counterweight_check = None

    def to_dict(self) -> Dict[str, Any]:
        """Export project data as dictionary for JSON serialization"""
        return {
            "metadata": asdict(self.metadata),
            "inputs": self.inputs.to_dict(),
            "car_rail": self.car_rail,
            "cwt_rail": self.cwt_rail,
            "custom_inputs": dict(self.custom_inputs),
            "results": {
                c.load_case.value: {
                    "rail": c.size,
                    "status": c.status,
                    "utilization": c.utilization,
                    **c.result.to_dict(),
                }
                for c in self.checks
            },
        }
