import math

import numpy as np
import pytest
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
from spectre.radio import Beam


def test_beam_from_axes():
    beam = Beam(5 * u.arcsec, 3 * u.arcsec, 45 * u.deg)
    assert beam.major == 5 * u.arcsec
    assert u.isclose(beam.minor, 3 * u.arcsec)
    assert beam.pa == 45 * u.deg
    expected_area = (5 * u.arcsec).to_value(u.rad) * (3 * u.arcsec).to_value(u.rad) * FWHM_TO_AREA
    assert beam.area.to_value(u.sr) == pytest.approx(expected_area, rel=1e-14)
    assert beam.sr.unit == u.sr


def test_beam_default_minor_and_pa():
    beam = Beam(2.5 * u.arcsec)
    assert beam.major == 2.5 * u.arcsec
    assert beam.minor == 2.5 * u.arcsec
    assert beam.pa == 0 * u.deg


def test_plain_numbers():
    beam = Beam(2, 1, 30)
    assert beam.major == 2 * u.arcsec
    assert beam.pa == 30 * u.deg
    assert u.isclose(Beam(1, default_unit=u.deg).major, 3600 * u.arcsec)


def test_beam_from_area():
    fwhm = (4 * u.arcsec).to_value(u.rad)
    sigma = fwhm / SIGMA_TO_FWHM
    area = 2 * np.pi * sigma ** 2 * u.sr
    beam = Beam(area=area)
    assert beam.major.to_value(u.rad) == pytest.approx(fwhm, rel=1e-12)
    assert beam.minor == beam.major
    assert beam.pa == 0 * u.deg


@pytest.mark.parametrize("area", [1e-10 * u.sr, 3 * u.arcsec ** 2, 1e-12])
def test_area_beam_is_circular(area):
    beam = Beam(area=area)
    assert beam.minor == beam.major
    assert beam.pa == 0 * u.deg
    assert beam.is_circular()


@pytest.mark.parametrize("major", [0.1 * u.arcsec, 3 * u.arcsec, 1 * u.deg])
def test_circular_round_trip(major):
    area = major.to_value(u.rad) ** 2 * math.pi / (4 * math.log(2)) * u.sr
    assert u.isclose(Beam(area=area).major, Beam(major, major, 0 * u.deg).major, rtol=1e-6)


def test_minor_greater_than_major_error():
    with pytest.raises(MinorGreaterThanMajor):
        Beam(2 * u.arcsec, 3 * u.arcsec)


def test_missing_all_params_error():
    with pytest.raises(MissingParameter):
        Beam()


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(major=2 * u.arcsec),
        dict(minor=2 * u.arcsec),
        dict(pa=10 * u.deg),
        dict(major=2 * u.arcsec, minor=1 * u.arcsec, pa=10 * u.deg),
    ]
)
def test_conflicting_params_error(kwargs):
    with pytest.raises(ExclusiveParameterConflict):
        Beam(area=1e-8 * u.sr, **kwargs)


def test_invalid_units():
    with pytest.raises(InvalidAreaUnit):
        Beam(area=1 * u.m)
    with pytest.raises(InvalidAngleUnit):
        Beam(1 * u.m)
    with pytest.raises(BeamError):
        Beam(-1 * u.arcsec)
    with pytest.raises(ValueError):
        Beam(area=-1 * u.sr)


@pytest.mark.parametrize(
    "beam, rtol, expected",
    [
        [Beam(1 * u.arcsec), 1e-6, True],
        [Beam(1 * u.arcsec, (1 - 1e-7) * u.arcsec), 1e-6, True],
        [Beam(1 * u.arcsec, 0.9 * u.arcsec), 1e-6, False],
        [Beam(1 * u.arcsec, 0.9 * u.arcsec), 0.2, True],
    ]
)
def test_is_circular(beam, rtol, expected):
    assert beam.is_circular(rtol) is expected


def test_equals_pa_modulo_180():
    assert Beam(3 * u.arcsec, 1 * u.arcsec, 10 * u.deg).equals(Beam(3 * u.arcsec, 1 * u.arcsec, 190 * u.deg))
    assert Beam(3 * u.arcsec, 1 * u.arcsec, -90 * u.deg) == Beam(3 * u.arcsec, 1 * u.arcsec, 90 * u.deg)
    assert Beam(3 * u.arcsec, 1 * u.arcsec, 0 * u.deg) != Beam(3 * u.arcsec, 1 * u.arcsec, 90 * u.deg)


def test_equals_ignores_pa_of_circular_beam():
    assert Beam(3 * u.arcsec, 3 * u.arcsec, 10 * u.deg) == Beam(3 * u.arcsec, 3 * u.arcsec, 80 * u.deg)


def test_equals_tolerance():
    beam = Beam(3 * u.arcsec)
    other = Beam(3.001 * u.arcsec)
    assert beam != other
    assert beam.equals(other, atol=0.01 * u.arcsec)


def test_convolve_circular():
    beam = Beam(3 * u.arcsec).convolve(Beam(4 * u.arcsec))
    assert u.isclose(beam.major, 5 * u.arcsec)
    assert u.isclose(beam.minor, 5 * u.arcsec)
    assert beam.pa == 0 * u.deg


def test_convolve_aligned_elliptical():
    beam = Beam(3 * u.arcsec, 1 * u.arcsec, 0 * u.deg) * Beam(4 * u.arcsec, 2 * u.arcsec, 0 * u.deg)
    assert u.isclose(beam.major, 5 * u.arcsec)
    assert u.isclose(beam.minor, math.sqrt(5) * u.arcsec)
    assert u.isclose(beam.area, Beam(5 * u.arcsec, math.sqrt(5) * u.arcsec).area)


@pytest.mark.parametrize(
    "beam1, beam2",
    [
        [Beam(3 * u.arcsec, 1 * u.arcsec, 30 * u.deg), Beam(2 * u.arcsec, 1.5 * u.arcsec, -20 * u.deg)],
        [Beam(1 * u.deg, 0.5 * u.deg, 75 * u.deg), Beam(10 * u.arcsec)],
        [Beam(5 * u.arcsec), Beam(4 * u.arcsec, 0.1 * u.arcsec, 110 * u.deg)],
    ]
)
def test_convolve_commutative(beam1, beam2):
    assert beam1.convolve(beam2).equals(beam2.convolve(beam1))


@pytest.mark.parametrize(
    "beam1, beam2",
    [
        [Beam(3 * u.arcsec, 1 * u.arcsec, 30 * u.deg), Beam(2 * u.arcsec, 1.5 * u.arcsec, -20 * u.deg)],
        [Beam(5 * u.arcsec), Beam(4 * u.arcsec, 1 * u.arcsec, 110 * u.deg)],
    ]
)
def test_deconvolve_inverts_convolve(beam1, beam2):
    convolved = beam1 * beam2
    assert (convolved / beam2).equals(beam1, atol=1e-6 * u.arcsec)


@pytest.mark.parametrize(
    "beam",
    [
        Beam(3 * u.arcsec),
        Beam(3 * u.arcsec, 1 * u.arcsec, 30 * u.deg),
        Beam(1 * u.deg, 0.3 * u.deg, 170 * u.deg),
    ]
)
def test_deconvolve_self_is_point(beam):
    point = beam.deconvolve(beam)
    assert point.major == 0 * u.arcsec
    assert point.minor == 0 * u.arcsec
    assert point.pa == 0 * u.deg
    assert point.area == 0 * u.sr


def test_deconvolve_larger_beam_is_point():
    point = Beam(3 * u.arcsec).deconvolve(Beam(5 * u.arcsec))
    assert point.major == 0 * u.arcsec
    point = Beam(5 * u.arcsec, 1 * u.arcsec, 0 * u.deg).deconvolve(Beam(2 * u.arcsec, 2 * u.arcsec))
    assert point.major == 0 * u.arcsec


def test_deconvolve_circular():
    beam = Beam(5 * u.arcsec) / Beam(3 * u.arcsec)
    assert u.isclose(beam.major, 4 * u.arcsec)
    assert u.isclose(beam.minor, 4 * u.arcsec)


def test_header_keywords():
    beam = Beam(3600 * u.arcsec, 1800 * u.arcsec, 20 * u.deg)
    keywords = beam.to_header_keywords()
    assert keywords == pytest.approx({"BMAJ": 1., "BMIN": 0.5, "BPA": 20.})
    assert Beam.from_fits_header(keywords) == beam
    with pytest.raises(MissingParameter):
        Beam.from_fits_header({"BMIN": 1.})


def test_from_fits_header_in_arcsec():
    beam = Beam.from_fits_header({"BMAJ": 1 / 3600, "BMIN": 0.5 / 3600, "BPA": 45})
    assert float(round(beam.minor.to_value(u.arcsec), 6)) == 0.5
    assert beam.major.unit == u.arcsec
    assert beam.pa == 45 * u.deg


def test_jtok():
    beam = Beam(1 * u.arcsec)
    temperature = beam.jtok(230 * u.GHz)
    assert temperature.unit == u.K
    assert temperature.value == pytest.approx(
        (1 * u.Jy).to_value(u.K, equivalencies=u.brightness_temperature(230 * u.GHz, beam.sr))
    )
    assert u.isclose(beam.jtok(230 * u.GHz, 2 * u.Jy), 2 * temperature)


def test_projected_area():
    beam = Beam(1 * u.arcsec)
    assert u.isclose(beam.beam_projected_area(100 * u.pc), beam.sr.value * (100 * u.pc) ** 2)
