class SpectreError(Exception):
    """Base class for spectre exceptions"""


class SpectreNotImplementedError(SpectreError, NotImplementedError):
    """Exception raised by methods which are not supported by the class"""


class SpectreValueError(SpectreError, ValueError):
    """Exception raised when the value of argument to the function is wrong"""


class SpectreWarning(UserWarning):
    """Base class for spectre warnings"""


class SpectreValueWarning(SpectreWarning):
    """Warning issued when the values are not consistent, but it is not critical"""


class LAMDAError(SpectreError):
    """Base class for errors raised while reading LAMDA database files"""


class LAMDAIOError(LAMDAError, OSError):
    """The underlying stream or file could not be read. The original `OSError` is set as `__cause__`"""


class LAMDAParseError(LAMDAError, ValueError):
    """
    Structural violation of the LAMDA file format

    Attributes:
        message: description of the fault
        section: LAMDA file section where the fault was found, e.g. "energy levels"
        line_number: 1-based number of the offending line, or None if not known
        line: raw content of the offending line, or None
    """

    def __init__(self, message: str, section: str = None, line_number: int = None, line: str = None):
        self.message = message
        self.section = section
        self.line_number = line_number
        self.line = line
        super().__init__(message)

    def __str__(self):
        location = []
        if self.section is not None:
            location.append(f"section '{self.section}'")
        if self.line_number is not None:
            location.append(f"line {self.line_number}")
        if not location:
            return self.message
        text = f"{self.message} ({', '.join(location)})"
        if self.line is not None:
            text += f": {self.line.strip()!r}"
        return text


class UnexpectedEndOfInput(LAMDAParseError):
    """The input ended while a line was still required"""


class InvalidPartnerId(LAMDAParseError):
    """Collision partner id is not one of the known LAMDA partners"""


class DuplicatePartnerError(LAMDAParseError):
    """The same collision partner is listed twice"""


class MissingField(LAMDAParseError):
    """The line has fewer whitespace-separated fields than required"""

    def __init__(self, index: int, name: str, section: str = None, line_number: int = None, line: str = None):
        self.index = index
        self.name = name
        super().__init__(f"Missing field #{index} ({name})", section, line_number, line)


class MalformedNumber(LAMDAParseError):
    """A field could not be converted to the requested number type"""
    kind = "number"

    def __init__(self, token: str, name: str, section: str = None, line_number: int = None, line: str = None):
        self.token = token
        self.name = name
        super().__init__(f"Cannot parse {name} as {self.kind}: {token!r}", section, line_number, line)


class LAMDAIntegerParseError(MalformedNumber):
    """A field could not be parsed as a non-negative integer"""
    kind = "non-negative integer"


class LAMDAFloatParseError(MalformedNumber):
    """A field could not be parsed as a floating point number"""
    kind = "float"


class LevelOrderError(LAMDAParseError):
    """Energy level id does not match its position in the energy level section"""


class UnknownLevelError(LAMDAParseError):
    """A transition references an energy level which is not defined"""


class TemperatureCountError(LAMDAParseError):
    """Declared number of collision temperatures does not match the temperatures line"""


class BeamError(SpectreValueError):
    """Base class for invalid beam parameters"""


class ExclusiveParameterConflict(BeamError):
    """Both `area` and any of `major`, `minor`, `pa` are given"""

    def __init__(self, message="Can only specify one of {major, minor, pa} and {area}"):
        super().__init__(message)


class MissingParameter(BeamError):
    """Neither `major` nor `area` is given"""

    def __init__(self, message="Either major axis or area must be specified"):
        super().__init__(message)


class MinorGreaterThanMajor(BeamError):
    """Minor axis is greater than major axis"""

    def __init__(self, message="Minor axis greater than major axis"):
        super().__init__(message)


class InvalidAreaUnit(BeamError):
    """Area is not convertible to steradian"""

    def __init__(self, message="Area unit should be equivalent to steradian (solid angle)"):
        super().__init__(message)


class InvalidAngleUnit(BeamError):
    """Axis or position angle is not convertible to degree"""

    def __init__(self, message="Beam axes and position angle should be equivalent to degree (angle)"):
        super().__init__(message)
