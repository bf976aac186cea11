"""Class CTable(astropy.table.QTable) with additional features for spectre"""
import io
from contextlib import redirect_stdout

from astropy import units as u
from astropy.table import QTable

from spectre.engine.exceptions import SpectreNotImplementedError


class CTable(QTable):
    """
    Subclass of astropy.table.Qtable for spectre

    Features:

        puts `name` attribute to the `__getitem__` output

        tables are views of parsed data, so rows can not be added

        __repr__() call sets formats to "e"

    Usage:

    >>> tbl = CTable()
    >>> tbl['Frequency'] = [115.27, 230.54] * u.GHz; tbl['Weight'] = [3e-4, 4e3]
    >>> tbl # doctest: +NORMALIZE_WHITESPACE
     Frequency       Weight
        GHz
    ------------ ------------
    1.152700e+02 3.000000e-04
    2.305400e+02 4.000000e+03

    >>> # .name attribute is properly set for the returned Quantity
    >>> tbl['Frequency'].name
    'Frequency'

    >>> # Adding rows is not possible
    >>> tbl.add_row([1 * u.GHz, 10])
    Traceback (most recent call last):
       ...
    spectre.engine.exceptions.SpectreNotImplementedError: Adding rows is not possible in CTable
    """

    def __getitem__(self, item):
        column_quantity = super().__getitem__(item)
        if isinstance(item, str):
            column_quantity.name = item
        return column_quantity

    def add_row(self, vals=None, mask=None):
        """
        Adding rows is not possible in CTable

        Raises: SpectreNotImplementedError
        """
        raise SpectreNotImplementedError("Adding rows is not possible in CTable")

    def __repr__(self):
        for column in self.colnames:
            self[column].info.format = "e"
        with io.StringIO() as buf, redirect_stdout(buf):
            self.pprint_all()
            output = buf.getvalue()
        return output

    def __str__(self):
        return self.__repr__()
