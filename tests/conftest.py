"""
Pytest Configuration and Fixtures

Shared fixtures for nerve-conduction scoring tests.
"""
import pytest
from pathlib import Path
import sys
from typing import List

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dspn.core.base import NerveId, NerveReading, PatientData
from dspn.core.scoring import NerveConductionEngine


def make_readings(**overrides) -> List[NerveReading]:
    """
    Mid-range (0-point) readings for a 45-year-old, 170 cm patient.

    Override a nerve with a dict of fields, e.g.
    make_readings(sural={"peak_latency": "NR"}).
    """
    base = {
        "tibial":  {"velocity": 45, "amplitude": 10},
        "fibular": {"velocity": 46, "amplitude": 5.0},
        "ulnar":   {"velocity": 60, "amplitude": 11},
        "sural":   {"peak_latency": 3.5, "amplitude": 20},
    }
    for name, fields in overrides.items():
        base[name] = {**base[name], **fields}

    return [
        NerveReading(NerveId.TIBIAL, **base["tibial"]),
        NerveReading(NerveId.FIBULAR, **base["fibular"]),
        NerveReading(NerveId.ULNAR, **base["ulnar"]),
        NerveReading(NerveId.SURAL, **base["sural"]),
    ]


@pytest.fixture
def patient() -> PatientData:
    """Middle-aged patient of average height."""
    return PatientData(age=45, height=170)


@pytest.fixture
def normal_readings() -> List[NerveReading]:
    return make_readings()


@pytest.fixture
def engine() -> NerveConductionEngine:
    return NerveConductionEngine(default_language="es")


@pytest.fixture
def readings_factory():
    """Factory fixture wrapping make_readings()."""
    return make_readings
