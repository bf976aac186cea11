"""Data model of a parsed LAMDA database file"""
from dataclasses import dataclass, field
from typing import Mapping, NamedTuple, Tuple

import numpy as np
from astropy import units as u

from spectre.engine.ctable import CTable
from spectre.engine.other import FrozenDict


@dataclass(frozen=True)
class Level:
    """Energy level of the molecule"""
    id: int
    """1-based id of the level, equal to its position in the file"""
    energy: float
    """Energy of the level, cm^-1"""
    weight: float
    """Statistical weight (degeneracy) of the level, g = (2J + 1) * symmetry factor"""
    j: int = 0
    """Angular momentum quantum number"""


@dataclass(frozen=True)
class RadTransition:
    """Radiative transition between two energy levels"""
    id: int
    up: int
    low: int
    einstein_a: float
    """Einstein A coefficient, s^-1"""
    frequency: float
    """GHz"""
    energy_upper: float
    """Energy of the upper level, K"""


class CollRate(NamedTuple):
    """Collisional rate coefficient at the given kinetic temperature"""
    temperature: float
    """K"""
    rate: float
    """cm^3 s^-1"""


@dataclass(frozen=True)
class ColliTransition:
    """Collisional transition with rates for all temperatures of the partner"""
    partner: str
    id: int
    up: int
    low: int
    rates: Tuple[CollRate, ...]

    @property
    def temperatures(self) -> Tuple[float, ...]:
        return tuple(rate.temperature for rate in self.rates)

    @property
    def coefficients(self) -> Tuple[float, ...]:
        return tuple(rate.rate for rate in self.rates)


@dataclass(frozen=True)
class CollSet:
    """All collisional transitions induced by a single collision partner"""
    partner: str
    temperatures: Tuple[float, ...]
    transitions: Tuple[ColliTransition, ...]

    def rates_at(self, transition_id: int) -> u.Quantity:
        """Collisional rates of the transition `transition_id` at `self.temperatures`"""
        for transition in self.transitions:
            if transition.id == transition_id:
                return u.Quantity(transition.coefficients, u.cm ** 3 / u.s)
        raise KeyError(f"No collisional transition {transition_id} for {self.partner}")

    def rates_table(self) -> CTable:
        """
        Collisional rates as a table

        Columns are "Transition", "Up", "Low", and one column per temperature, named as "{temperature} K"
        """
        table = CTable()
        table["Transition"] = [transition.id for transition in self.transitions]
        table["Up"] = [transition.up for transition in self.transitions]
        table["Low"] = [transition.low for transition in self.transitions]
        rates = np.array(
            [transition.coefficients for transition in self.transitions], dtype=float
        ).reshape(len(self.transitions), len(self.temperatures))
        for i, temperature in enumerate(self.temperatures):
            table[f"{temperature:g} K"] = u.Quantity(rates[:, i], u.cm ** 3 / u.s)
        return table


@dataclass(frozen=True)
class LAMDAData:
    """
    Content of a LAMDA database file

    Instances are created by `spectre.lamda.parse` and `spectre.lamda.parse_file` and are not modified afterwards

    Usage:
    >>> data = LAMDAData(
    ...     name="CO", weight=28.0,
    ...     levels=(Level(1, 0.0, 1.0, 0), Level(2, 3.845, 3.0, 1)),
    ...     radiative_transitions=(RadTransition(1, 2, 1, 7.203e-08, 115.2712018, 5.53),),
    ... )
    >>> data.level(2).energy
    3.845
    >>> data.frequencies
    <Quantity [115.2712018] GHz>
    >>> data.partners
    ()
    """
    name: str
    weight: float
    levels: Tuple[Level, ...]
    radiative_transitions: Tuple[RadTransition, ...]
    collisional_sets: Mapping[str, CollSet] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "levels", tuple(self.levels))
        object.__setattr__(self, "radiative_transitions", tuple(self.radiative_transitions))
        object.__setattr__(self, "collisional_sets", FrozenDict(self.collisional_sets))

    @property
    def partners(self) -> Tuple[str, ...]:
        """Names of the collision partners, in the file order"""
        return tuple(self.collisional_sets)

    @property
    def frequencies(self) -> u.Quantity:
        """Frequencies of radiative transitions"""
        return u.Quantity([transition.frequency for transition in self.radiative_transitions], u.GHz)

    def level(self, level_id: int) -> Level:
        """Energy level by its id"""
        if 1 <= level_id <= len(self.levels):
            return self.levels[level_id - 1]
        raise KeyError(f"No energy level {level_id} in {self.name}")

    def transition(self, transition_id: int) -> RadTransition:
        """Radiative transition by its id"""
        for transition in self.radiative_transitions:
            if transition.id == transition_id:
                return transition
        raise KeyError(f"No radiative transition {transition_id} in {self.name}")

    def levels_table(self) -> CTable:
        """Energy levels as a table with "Level", "Energy", "Weight", "J" columns"""
        table = CTable()
        table["Level"] = [level.id for level in self.levels]
        table["Energy"] = u.Quantity([level.energy for level in self.levels], (1 / u.cm))
        table["Weight"] = [level.weight for level in self.levels]
        table["J"] = [level.j for level in self.levels]
        return table

    def transitions_table(self) -> CTable:
        """Radiative transitions as a table with "Transition", "Up", "Low", "Einstein A", "Frequency", "Energy upper" columns"""
        transitions = self.radiative_transitions
        table = CTable()
        table["Transition"] = [transition.id for transition in transitions]
        table["Up"] = [transition.up for transition in transitions]
        table["Low"] = [transition.low for transition in transitions]
        table["Einstein A"] = u.Quantity([transition.einstein_a for transition in transitions], (1 / u.s))
        table["Frequency"] = u.Quantity([transition.frequency for transition in transitions], u.GHz)
        table["Energy upper"] = u.Quantity([transition.energy_upper for transition in transitions], u.K)
        return table
