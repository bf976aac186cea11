"""Elliptical Gaussian beams of radio telescopes and interferometers"""
import logging
from typing import Mapping, Tuple, Union

import numpy as np
from astropy import units as u

from spectre.constants import FWHM_TO_AREA, SIGMA_TO_FWHM
from spectre.engine.exceptions import (
    BeamError,
    ExclusiveParameterConflict,
    InvalidAngleUnit,
    InvalidAreaUnit,
    MinorGreaterThanMajor,
    MissingParameter,
)

logger = logging.getLogger(__name__)

_EPS = np.finfo(float).eps
_PA_ATOL = 1e-7
"""arcsec, below which the convolved beam is treated as circular"""

AngleLike = Union[u.Quantity, float]


def _as_quantity(value, unit: u.UnitBase, error: type) -> u.Quantity:
    try:
        return u.Quantity(value, unit)
    except u.UnitsError as err:
        raise error() from err


class Beam:
    """
    Elliptical Gaussian beam

    Beam is defined either by its FWHM axes and position angle, or by its area,
    which creates a circular beam. Beams are immutable.

    Args:
        major: FWHM major axis
        minor: FWHM minor axis, equals to `major` if not set
        pa: position angle of the major axis, 0 if not set. Plain numbers are in degrees
        area: beam solid angle, exclusive with the other parameters. Plain numbers are in sr
        default_unit: unit of `major` and `minor` if they are given as plain numbers

    Usage:
    >>> beam = Beam(5 * u.arcsec, 3 * u.arcsec, 30 * u.deg)
    >>> beam.major, beam.minor, beam.pa
    (<Quantity 5. arcsec>, <Quantity 3. arcsec>, <Quantity 30. deg>)
    >>> Beam(2 * u.arcsec).is_circular()
    True
    >>> Beam(2 * u.arcsec, 3 * u.arcsec)
    Traceback (most recent call last):
       ...
    spectre.engine.exceptions.MinorGreaterThanMajor: Minor axis greater than major axis

    Convolution with `*`, deconvolution with `/`:
    >>> (Beam(3 * u.arcsec) * Beam(4 * u.arcsec)).major
    <Quantity 5. arcsec>
    >>> Beam(3 * u.arcsec) / Beam(3 * u.arcsec) == Beam(0 * u.arcsec)
    True
    """
    __hash__ = None

    def __init__(
            self,
            major: AngleLike = None,
            minor: AngleLike = None,
            pa: AngleLike = None,
            area: Union[u.Quantity, float] = None,
            default_unit: u.UnitBase = u.arcsec,
    ):
        if area is not None:
            if major is not None or minor is not None or pa is not None:
                raise ExclusiveParameterConflict()
            area = _as_quantity(area, u.sr, InvalidAreaUnit)
            if area < 0:
                raise BeamError(f"Beam area should be non-negative, got {area}")
            sigma = np.sqrt(area.to_value(u.sr) / (2 * np.pi)) * u.rad
            major = minor = (sigma * SIGMA_TO_FWHM).to(default_unit)
            pa = 0 * u.deg
        else:
            if major is None:
                raise MissingParameter()
            major = _as_quantity(major, default_unit, InvalidAngleUnit)
            minor = major if minor is None else _as_quantity(minor, default_unit, InvalidAngleUnit)
            pa = 0 * u.deg if pa is None else _as_quantity(pa, u.deg, InvalidAngleUnit)
            if minor < 0:
                raise BeamError(f"Beam axes should be non-negative, got {major}, {minor}")
            if minor > major:
                raise MinorGreaterThanMajor()

        self._major = major
        self._minor = minor
        self._pa = pa
        self._area = self._to_area(major, minor)

    @staticmethod
    def _to_area(major: u.Quantity, minor: u.Quantity) -> u.Quantity:
        return major.to_value(u.rad) * minor.to_value(u.rad) * FWHM_TO_AREA * u.sr

    @property
    def major(self) -> u.Quantity:
        """FWHM major axis"""
        return self._major

    @property
    def minor(self) -> u.Quantity:
        """FWHM minor axis"""
        return self._minor

    @property
    def pa(self) -> u.Quantity:
        """Position angle of the major axis"""
        return self._pa

    @property
    def area(self) -> u.Quantity:
        """Solid angle of the beam"""
        return self._area

    @property
    def sr(self) -> u.Quantity:
        return self._area.to(u.sr)

    @classmethod
    def from_fits_header(cls, header: Mapping) -> "Beam":
        """
        Reads the beam from `BMAJ`, `BMIN`, and `BPA` FITS header keywords, all in degrees

        >>> beam = Beam.from_fits_header({"BMAJ": 1 / 3600, "BMIN": 0.5 / 3600, "BPA": 45})
        >>> float(round(beam.minor.to_value(u.arcsec), 6)), beam.pa
        (0.5, <Quantity 45. deg>)
        """
        if "BMAJ" not in header:
            raise MissingParameter("No BMAJ keyword in the header")
        major = header["BMAJ"] * u.deg
        minor = header.get("BMIN", header["BMAJ"]) * u.deg
        pa = header.get("BPA", 0) * u.deg
        return cls(major.to(u.arcsec), minor.to(u.arcsec), pa)

    def to_header_keywords(self) -> dict:
        """`BMAJ`, `BMIN`, and `BPA` FITS header keywords, in degrees"""
        return {
            "BMAJ": self.major.to_value(u.deg),
            "BMIN": self.minor.to_value(u.deg),
            "BPA": self.pa.to_value(u.deg),
        }

    def beam_projected_area(self, distance: u.Quantity) -> u.Quantity:
        """Physical area covered by the beam at `distance`"""
        return self.sr.value * distance ** 2

    def jtok_equiv(self, frequency: u.Quantity) -> list:
        """Equivalency between flux density per beam and brightness temperature at `frequency`"""
        return u.brightness_temperature(frequency, beam_area=self.sr)

    def jtok(self, frequency: u.Quantity, value: u.Quantity = 1 * u.Jy) -> u.Quantity:
        """Brightness temperature corresponding to flux density `value` in the beam"""
        return value.to(u.K, equivalencies=self.jtok_equiv(frequency))

    def is_circular(self, rtol: float = 1e-6) -> bool:
        """Whether the relative difference between the axes is within `rtol`"""
        if self.major == 0:
            return True
        return bool((self.major - self.minor) / self.major <= rtol)

    def equals(self, other: "Beam", atol: AngleLike = 1e-10 * u.deg) -> bool:
        """
        Compares the axes and the position angle of the beams within absolute tolerance `atol`

        Position angles are compared modulo 180 deg, and are not compared if any of the beams is circular
        """
        atol = u.Quantity(atol, u.deg).to_value(u.deg)
        major_equal = abs(self.major.to_value(u.deg) - other.major.to_value(u.deg)) <= atol
        minor_equal = abs(self.minor.to_value(u.deg) - other.minor.to_value(u.deg)) <= atol
        if self.is_circular() or other.is_circular():
            pa_equal = True
        else:
            pa_difference = abs(self.pa.to_value(u.deg) % 180 - other.pa.to_value(u.deg) % 180)
            pa_equal = min(pa_difference, 180 - pa_difference) <= atol
        return bool(major_equal and minor_equal and pa_equal)

    def _quadratic_form(self) -> Tuple[float, float, float]:
        """Coefficients of the beam quadratic form, in arcsec^2"""
        major = self.major.to_value(u.arcsec)
        minor = self.minor.to_value(u.arcsec)
        pa = self.pa.to_value(u.rad)
        alpha = (major * np.cos(pa)) ** 2 + (minor * np.sin(pa)) ** 2
        beta = (major * np.sin(pa)) ** 2 + (minor * np.cos(pa)) ** 2
        gamma = 2 * (minor ** 2 - major ** 2) * np.sin(pa) * np.cos(pa)
        return alpha, beta, gamma

    @staticmethod
    def _from_quadratic_form(alpha: float, beta: float, gamma: float) -> Tuple[float, float, float]:
        s = alpha + beta
        t = np.sqrt((alpha - beta) ** 2 + gamma ** 2)
        new_major = np.sqrt(0.5 * (s + t))
        new_minor = np.sqrt(max(0.5 * (s - t), 0))
        if np.sqrt(abs(gamma) + abs(alpha - beta)) < _PA_ATOL:
            new_pa = 0.
        else:
            new_pa = 0.5 * np.arctan2(-gamma, alpha - beta)
        return new_major, new_minor, new_pa

    def convolve(self, other: "Beam") -> "Beam":
        """
        Convolves the beam with `other`

        >>> Beam(3 * u.arcsec).convolve(Beam(4 * u.arcsec)).equals(Beam(5 * u.arcsec))
        True
        """
        alpha1, beta1, gamma1 = self._quadratic_form()
        alpha2, beta2, gamma2 = other._quadratic_form()
        new_major, new_minor, new_pa = self._from_quadratic_form(
            alpha1 + alpha2, beta1 + beta2, gamma1 + gamma2
        )
        return Beam(new_major * u.arcsec, new_minor * u.arcsec, (new_pa * u.rad).to(u.deg))

    def deconvolve(self, other: "Beam") -> "Beam":
        """
        Deconvolves `other` from the beam

        If `other` can not be deconvolved, e.g. it is larger than the beam along any direction,
        a point-like beam with zero axes is returned
        """
        if self.equals(other):
            logger.debug("Deconvolving %s from itself, returning point-like beam", self)
            return Beam(0 * u.arcsec, 0 * u.arcsec, 0 * u.deg)

        alpha1, beta1, gamma1 = self._quadratic_form()
        alpha2, beta2, gamma2 = other._quadratic_form()
        alpha = alpha1 - alpha2
        beta = beta1 - beta2
        gamma = gamma1 - gamma2
        s = alpha + beta
        t = np.sqrt((alpha - beta) ** 2 + gamma ** 2)

        if alpha + _EPS < 0 or beta + _EPS < 0 or s < t + _EPS * 3600 ** 2:
            logger.debug("%s can not be deconvolved from %s, returning point-like beam", other, self)
            return Beam(0 * u.arcsec, 0 * u.arcsec, 0 * u.deg)

        new_major, new_minor, new_pa = self._from_quadratic_form(alpha, beta, gamma)
        return Beam(
            (new_major + _EPS) * u.arcsec,
            (new_minor + _EPS) * u.arcsec,
            (new_pa * u.rad).to(u.deg)
        )

    def __mul__(self, other: "Beam") -> "Beam":
        return self.convolve(other)

    def __truediv__(self, other: "Beam") -> "Beam":
        return self.deconvolve(other)

    def __eq__(self, other):
        if not isinstance(other, Beam):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other):
        if not isinstance(other, Beam):
            return NotImplemented
        return not self.equals(other)

    def __repr__(self):
        return (
            f"Beam: BMAJ={self.major.to_value(u.arcsec)} arcsec "
            f"BMIN={self.minor.to_value(u.arcsec)} arcsec "
            f"BPA={self.pa.to_value(u.deg)} deg"
        )
