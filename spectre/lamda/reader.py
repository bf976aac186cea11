"""
Reader of the LAMDA database file format

https://home.strw.leidenuniv.nl/~moldata/
Schöier, F.L., van der Tak, F.F.S., van Dishoeck E.F., Black, J.H. 2005, A&A 432, 369-379

The format is line-positional: every scalar or record occupies one line,
and every section is preceded by comment lines which carry no data.
"""
import logging
import warnings
from dataclasses import dataclass
from typing import Dict, IO, Iterable, Tuple, Union

from spectre.engine.exceptions import (
    DuplicatePartnerError,
    InvalidPartnerId,
    LAMDAIntegerParseError,
    LAMDAIOError,
    LAMDAParseError,
    LevelOrderError,
    SpectreValueWarning,
    TemperatureCountError,
    UnknownLevelError,
)
from spectre.engine.other import PathLike
from spectre.lamda.cursor import LineCursor
from spectre.lamda.data import CollRate, CollSet, ColliTransition, LAMDAData, Level, RadTransition
from spectre.lamda.fields import Fields

PARTNERS: Dict[str, str] = {
    "1": "H2",
    "2": "p-H2",
    "3": "o-H2",
    "4": "e",
    "5": "H",
    "6": "He",
    "7": "H+",
}
"""LAMDA collision partner ids and the corresponding partner names"""


@dataclass
class LAMDAReader:
    """
    Parser of LAMDA database files

    Args:
        require_j: whether the 4th column of energy levels (angular momentum quantum number J) is mandatory.
            If False, levels without J, or with a non-integer level label in its place (e.g. `1_0_1`), get J = 0
        check_temperature_count: whether the declared number of collision temperatures must match
            the temperatures line. If False, a warning is issued and the temperatures line is used
        encoding: encoding used to decode binary streams and files

    Usage:
    >>> import io
    >>> text = '''!MOLECULE
    ... CO
    ... !MOLECULAR WEIGHT
    ... 28.0
    ... !NUMBER OF ENERGY LEVELS
    ... 2
    ... !LEVEL + ENERGIES(cm^-1) + WEIGHT + J
    ...     1     0.000000000  1.0     0
    ...     2     3.845033413  3.0     1
    ... !NUMBER OF RADIATIVE TRANSITIONS
    ... 1
    ... !TRANS + UP + LOW + EINSTEINA(s^-1) + FREQ(GHz) + E_u(K)
    ...     1     2     1  7.203e-08    115.2712018      5.53
    ... !NUMBER OF COLL PARTNERS
    ... 0
    ... '''
    >>> data = LAMDAReader().read(io.StringIO(text))
    >>> data.name, data.weight, len(data.levels)
    ('CO', 28.0, 2)
    >>> data.radiative_transitions[0].frequency
    115.2712018
    """
    require_j: bool = False
    check_temperature_count: bool = True
    encoding: str = "utf-8"

    def __post_init__(self):
        self.logger = logging.getLogger(__name__ + '.' + self.__class__.__qualname__)
        self.logger.info("Creating an instance of %s", self.__class__.__qualname__)
        self.logger.debug("With parameters: %s", self.__dict__)

    def read_file(self, path: PathLike) -> LAMDAData:
        """Opens LAMDA file at `path` and parses it"""
        self.logger.info("Reading LAMDA file: %s", path)
        try:
            lamda = open(path, "rb")
        except OSError as err:
            raise LAMDAIOError(f"Can not open LAMDA file {path}: {err}") from err
        with lamda:
            return self.read(lamda)

    def read(self, stream: Iterable[Union[str, bytes]]) -> LAMDAData:
        """
        Parses the LAMDA file content from a stream of lines

        Args:
            stream: text or binary file object, or any iterable of lines

        Raises:
            LAMDAParseError: the content does not follow the LAMDA format
            LAMDAIOError: the stream can not be read
        """
        cursor = LineCursor(stream, encoding=self.encoding)

        cursor.section = "molecule"
        cursor.skip_line("molecule header")
        name = cursor.next_line("molecule name").strip()
        if not name:
            raise LAMDAParseError("Empty molecule name", cursor.section, cursor.line_number)
        cursor.skip_line("molecular weight header")
        weight = self._fields(cursor, "molecular weight").as_float(0, "molecular weight")

        cursor.section = "energy levels"
        levels = self._read_levels(cursor)

        cursor.section = "radiative transitions"
        radiative_transitions = self._read_radiative_transitions(cursor, len(levels))

        cursor.section = "collisional partners"
        collisional_sets = self._read_collisional_sets(cursor, len(levels))

        self.logger.info(
            "Parsed %s: %d levels, %d radiative transitions, collision partners: %s",
            name, len(levels), len(radiative_transitions), list(collisional_sets)
        )
        return LAMDAData(
            name=name,
            weight=weight,
            levels=levels,
            radiative_transitions=radiative_transitions,
            collisional_sets=collisional_sets,
        )

    @staticmethod
    def _fields(cursor: LineCursor, what: str) -> Fields:
        line = cursor.next_line(what)
        return Fields(line, cursor.line_number, cursor.section)

    def _read_count(self, cursor: LineCursor, what: str) -> int:
        cursor.skip_line(f"{what} header")
        count = self._fields(cursor, what).as_uint(0, what)
        self.logger.debug("%s: %d", what, count)
        return count

    def _read_levels(self, cursor: LineCursor) -> Tuple[Level, ...]:
        number_levels = self._read_count(cursor, "number of energy levels")
        cursor.skip_line("energy levels column header")
        levels = []
        for position in range(1, number_levels + 1):
            fields = self._fields(cursor, f"energy level {position} of {number_levels}")
            level_id = fields.as_uint(0, "level id")
            if level_id != position:
                raise LevelOrderError(
                    f"Level id {level_id} does not match its position {position}",
                    cursor.section, cursor.line_number, fields.line
                )
            j = self._read_j(fields)
            levels.append(Level(
                id=level_id,
                energy=fields.as_float(1, "energy"),
                weight=fields.as_float(2, "statistical weight"),
                j=j,
            ))
        return tuple(levels)

    def _read_j(self, fields: Fields) -> int:
        if self.require_j:
            return fields.as_uint(3, "J")
        if len(fields) < 4:
            return 0
        try:
            return fields.as_uint(3, "J")
        except LAMDAIntegerParseError:
            self.logger.debug("Level label %r is not an integer J, using J = 0", fields.tokens[3])
            return 0

    def _read_radiative_transitions(self, cursor: LineCursor, number_levels: int) -> Tuple[RadTransition, ...]:
        number_transitions = self._read_count(cursor, "number of radiative transitions")
        cursor.skip_line("radiative transitions column header")
        transitions = []
        for position in range(1, number_transitions + 1):
            fields = self._fields(cursor, f"radiative transition {position} of {number_transitions}")
            transition = RadTransition(
                id=fields.as_uint(0, "transition id"),
                up=self._level_id(fields, 1, "upper level", number_levels),
                low=self._level_id(fields, 2, "lower level", number_levels),
                einstein_a=fields.as_float(3, "Einstein A"),
                frequency=fields.as_float(4, "frequency"),
                energy_upper=fields.as_float(5, "upper level energy"),
            )
            if transition.einstein_a < 0:
                raise LAMDAParseError(
                    f"Negative Einstein A coefficient {transition.einstein_a}",
                    cursor.section, cursor.line_number, fields.line
                )
            transitions.append(transition)
        return tuple(transitions)

    def _read_collisional_sets(self, cursor: LineCursor, number_levels: int) -> Dict[str, CollSet]:
        number_partners = self._read_count(cursor, "number of collision partners")
        collisional_sets = {}
        for _ in range(number_partners):
            partner = self._read_partner(cursor)
            if partner in collisional_sets:
                raise DuplicatePartnerError(
                    f"Collision partner {partner} is listed more than once", cursor.section, cursor.line_number
                )
            collisional_sets[partner] = self._read_collisional_set(cursor, partner, number_levels)
        return collisional_sets

    def _read_partner(self, cursor: LineCursor) -> str:
        cursor.skip_line("collision partner header")
        fields = self._fields(cursor, "collision partner id")
        token = fields.as_str(0, "collision partner id")
        try:
            partner = PARTNERS[token]
        except KeyError:
            raise InvalidPartnerId(
                f"Invalid collision partner id {token!r}, expected one of {', '.join(PARTNERS)}",
                cursor.section, cursor.line_number, fields.line
            ) from None
        self.logger.debug("Collision partner: %s", partner)
        return partner

    def _read_collisional_set(self, cursor: LineCursor, partner: str, number_levels: int) -> CollSet:
        number_transitions = self._read_count(cursor, f"number of collisional transitions with {partner}")
        number_temperatures = self._read_count(cursor, f"number of collision temperatures with {partner}")
        cursor.skip_line("collision temperatures header")
        temperatures = self._fields(cursor, "collision temperatures").as_floats("collision temperature")
        if len(temperatures) != number_temperatures:
            message = (
                f"{number_temperatures} collision temperatures with {partner} declared, "
                f"but {len(temperatures)} found"
            )
            if self.check_temperature_count:
                raise TemperatureCountError(message, cursor.section, cursor.line_number)
            warnings.warn(SpectreValueWarning(message))

        cursor.skip_line("collisional transitions column header")
        transitions = []
        for position in range(1, number_transitions + 1):
            fields = self._fields(cursor, f"collisional transition {position} of {number_transitions} with {partner}")
            rates = fields.as_floats("collisional rate", start=3, count=len(temperatures))
            transitions.append(ColliTransition(
                partner=partner,
                id=fields.as_uint(0, "transition id"),
                up=self._level_id(fields, 1, "upper level", number_levels),
                low=self._level_id(fields, 2, "lower level", number_levels),
                rates=tuple(CollRate(temperature, rate) for temperature, rate in zip(temperatures, rates)),
            ))
        return CollSet(partner=partner, temperatures=temperatures, transitions=tuple(transitions))

    @staticmethod
    def _level_id(fields: Fields, index: int, name: str, number_levels: int) -> int:
        level_id = fields.as_uint(index, name)
        if not 1 <= level_id <= number_levels:
            raise UnknownLevelError(
                f"The {name} {level_id} is not among {number_levels} energy levels",
                fields.section, fields.line_number, fields.line
            )
        return level_id


def parse(stream: Union[IO, Iterable[Union[str, bytes]]], **kwargs) -> LAMDAData:
    """
    Parses LAMDA file content from a stream

    Args:
        stream: text or binary file object, or any iterable of lines
        **kwargs: passed to `LAMDAReader`
    """
    return LAMDAReader(**kwargs).read(stream)


def parse_file(path: PathLike, **kwargs) -> LAMDAData:
    """
    Parses LAMDA file at `path`

    Args:
        path: path to the LAMDA database file
        **kwargs: passed to `LAMDAReader`
    """
    return LAMDAReader(**kwargs).read_file(path)
