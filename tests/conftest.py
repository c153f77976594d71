import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from liftrail.core.data_models import RailProject, SystemInputs
from liftrail.core.rail_catalog import lookup_rail
from liftrail.engines.rail_analysis import run_analysis


@pytest.fixture
def default_inputs() -> SystemInputs:
    return SystemInputs()


@pytest.fixture
def t90():
    return lookup_rail("T90/A")


@pytest.fixture
def t70():
    return lookup_rail("T70/A")


@pytest.fixture
def analysed_project() -> RailProject:
    """Default project with all three load cases evaluated."""
    project = RailProject()
    project.metadata.project_name = "Tower A Lift 1"
    project.metadata.customer = "ACME Lifts"
    project.custom_inputs = {"wind_pressure": 0.5, "seismic_zone": "2"}
    return run_analysis(project)
