"""Whitespace-separated fields of a single LAMDA line"""
import re
from typing import List, Tuple

from spectre.engine.exceptions import LAMDAFloatParseError, LAMDAIntegerParseError, MissingField

_UINT = re.compile(r"\+?[0-9]+")
_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eEdD][+-]?[0-9]+)?")


class Fields:
    """
    Tokens of a line, converted on request to the expected type

    Usage:
    >>> fields = Fields("  2   3.845   3.0  1", line_number=7, section="energy levels")
    >>> len(fields)
    4
    >>> fields.as_uint(0, "level id"), fields.as_float(1, "energy")
    (2, 3.845)
    >>> Fields("1.5D-05").as_float(0, "rate")
    1.5e-05
    >>> fields.as_uint(4, "J")
    Traceback (most recent call last):
       ...
    spectre.engine.exceptions.MissingField: Missing field #4 (J) (section 'energy levels', line 7): '2   3.845   3.0  1'
    """

    def __init__(self, line: str, line_number: int = None, section: str = None):
        self.line = line
        self.line_number = line_number
        self.section = section
        self.tokens: List[str] = line.split()

    def __len__(self):
        return len(self.tokens)

    def _token(self, index: int, name: str) -> str:
        try:
            return self.tokens[index]
        except IndexError:
            raise MissingField(index, name, self.section, self.line_number, self.line) from None

    def as_str(self, index: int, name: str) -> str:
        """Returns the token as it is"""
        return self._token(index, name)

    def as_uint(self, index: int, name: str) -> int:
        """Returns the token as a non-negative integer"""
        token = self._token(index, name)
        if not _UINT.fullmatch(token):
            raise LAMDAIntegerParseError(token, name, self.section, self.line_number, self.line)
        return int(token)

    def as_float(self, index: int, name: str) -> float:
        """Returns the token as float. Fortran double precision exponents (`1.0D-05`) are accepted"""
        return self._to_float(self._token(index, name), name)

    def as_floats(self, name: str, start: int = 0, count: int = None) -> Tuple[float, ...]:
        """
        Returns a tuple of floats starting from token `start`

        Args:
            name: name of the values, used in error messages
            start: index of the first token
            count: number of values to read. All the remaining tokens are read if None
        """
        if count is None:
            count = len(self.tokens) - start
        return tuple(self.as_float(index, name) for index in range(start, start + count))

    def _to_float(self, token: str, name: str) -> float:
        if not _FLOAT.fullmatch(token):
            raise LAMDAFloatParseError(token, name, self.section, self.line_number, self.line)
        return float(token.replace("d", "e").replace("D", "e"))
