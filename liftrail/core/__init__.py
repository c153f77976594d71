# Core data, constants and reference tables
from .data_models import (
    LoadCase, RailProperties, SystemInputs, CalculationResult,
    RailCheck, ProjectMetadata, RailProject,
)
from .constants import Constants, DEFAULT_CONSTANTS
from .exceptions import LiftRailError, ConfigurationError, InvalidGeometryError
from .rail_catalog import RAIL_CATALOG, lookup_rail, list_rails, rail_names
from .buckling import OMEGA_TABLE, omega
from .reconciliation import ReconciliationResult, reconcile_inputs
