"""spectre package

Readers for molecular spectroscopic databases (LAMDA) and Gaussian beam arithmetic for radio astronomy
"""
__author__ = "ProsiaLAB"

import logging

from spectre import constants, engine, lamda, radio

from spectre.engine.ctable import CTable
from spectre.lamda import LAMDAData, LAMDAReader, Line, parse, parse_file
from spectre.radio import Beam


def logging_basic_config(
        format='%(asctime)s (%(relativeCreated)10d ms) PID %(process)10d  %(name)-60s %(levelname)-8s %(message)s',
        datefmt='%m.%d.%Y %H:%M:%S',
        level=logging.WARNING,
        **kwargs
):
    """Sets default logging configuration"""
    logging.basicConfig(format=format, datefmt=datefmt, level=level, **kwargs)
