"""Numerical constants of the two-dimensional Gaussian beam"""
import math

FWHM_TO_AREA = 2 * math.pi / (8 * math.log(2))
"""Converts the product of 2D Gaussian FWHM axes (in radians) to the effective solid angle (in sr)"""

SIGMA_TO_FWHM = 2.35482004503
"""Converts Gaussian sigma to FWHM, == sqrt(8 * ln(2))"""
