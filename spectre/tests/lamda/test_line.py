import os

import pytest
from astropy import units as u

from spectre.engine.exceptions import SpectreValueError
from spectre.lamda import Line

HCO_FILE = os.path.join(os.path.dirname(__file__), "..", "data", "hco+.dat")


@pytest.mark.parametrize(
    "transition, frequency",
    [
        [1, 89.188523 * u.GHz],
        [2, 178.3750563 * u.GHz],
        [3, 267.5576259 * u.GHz],
    ]
)
def test_frequency(transition, frequency):
    line = Line(name=f"HCO+ {transition}", transition=transition, molecule="HCO+", lamda_file=HCO_FILE)
    assert u.isclose(line.frequency, frequency)


def test_line_attributes():
    line = Line(name="HCO+ J=1-0", transition=1, molecule="HCO+", lamda_file=HCO_FILE, collision_partner=("H2", "e"))
    assert line.lamda_molecule == "HCO+"
    assert line.molweight == 29.0
    assert line.number_levels == 4
    assert line.number_transitions == 3
    assert line.levels.loc[2]["Weight"] == 5.0


def test_unknown_collision_partner():
    with pytest.raises(SpectreValueError):
        Line(name="HCO+ J=1-0", transition=1, molecule="HCO+", lamda_file=HCO_FILE, collision_partner=("He",))


def test_hash():
    line1 = Line(name="HCO+ J=1-0", transition=1, molecule="HCO+", lamda_file=HCO_FILE)
    line2 = Line(name="HCO+ J=1-0", transition=2, molecule="HCO+", lamda_file=HCO_FILE)
    assert hash(line1) == hash(line2)
    assert len({line1: 1}) == 1
