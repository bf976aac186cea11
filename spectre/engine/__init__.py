"""
Package with basic objects used in the whole project

Important:

`spectre.engine.CTable` -- `astropy.table.QTable`-like object used for tabular views of parsed data

`spectre.engine.exceptions` -- exception hierarchy rooted in `SpectreError`
"""
from spectre.engine.ctable import CTable
from spectre.engine.exceptions import SpectreError, SpectreValueError, SpectreValueWarning
