"""
Package with radio astronomy tools

Important:

`spectre.radio.Beam` -- elliptical Gaussian beam with convolution and deconvolution
"""
from spectre.radio.beam import Beam
