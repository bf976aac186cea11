from dataclasses import dataclass
import logging

from astropy import units as u

from spectre.engine.exceptions import SpectreValueError
from spectre.engine.other import PathLike
from spectre.lamda.reader import parse_file


@dataclass
class Line:
    """
    A class that reads and stores the information of the emission line

    `Line` instances is hashable, `name` is the key used to hash

    Usage:
    >>> import os
    >>> lamda_file = os.path.join(os.path.dirname(__file__), "..", "tests", "data", "hco+.dat")
    >>> line = Line(name="HCO+ J=2-1", transition=2, molecule="HCO+", lamda_file=lamda_file)
    >>> line.lamda_molecule, line.molweight, line.number_levels
    ('HCO+', 29.0, 4)
    >>> line.frequency
    <Quantity 178.3750563 GHz>

    Use `line.levels.loc` to index by J. Slices and lists, but not tuples, are allowed.
    >>> line.levels.loc[[1, 2]]["Level"].tolist()
    [2, 3]
    """
    name: str
    transition: int
    molecule: str
    lamda_file: PathLike
    collision_partner: tuple = ('H2',)

    def __post_init__(self):
        self.logger = logging.getLogger(__name__ + '.' + self.__class__.__qualname__ + f'({self.name})')
        self.logger.info("Creating an instance of %s", self.__class__.__qualname__)
        self.logger.debug("With parameters: %s", self.__dict__)
        self.parse_lamda()

    def parse_lamda(self):
        """Parses LAMDA database file to identify collision partners and frequency"""
        self.data = parse_file(self.lamda_file)
        self.lamda_molecule = self.data.name
        self.molweight = self.data.weight
        self.number_levels = len(self.data.levels)
        self.number_transitions = len(self.data.radiative_transitions)

        self.levels = self.data.levels_table()
        self.levels.add_index("J")
        self.transitions = self.data.transitions_table()
        self.transitions.add_index("Transition")

        if self.data.collisional_sets:
            missing = [partner for partner in self.collision_partner if partner not in self.data.collisional_sets]
            if missing:
                raise SpectreValueError(
                    f"Collision partners {missing} are not in {self.lamda_file}, "
                    f"available: {list(self.data.partners)}"
                )
        self.logger.debug("Collision partners in the file: %s", self.data.partners)

    @property
    def frequency(self) -> u.Quantity:
        return self.transitions.loc[self.transition]["Frequency"]

    def __hash__(self):
        return hash(self.name)
