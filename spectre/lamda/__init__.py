"""Package to read LAMDA database files

https://home.strw.leidenuniv.nl/~moldata/
Schöier, F.L., van der Tak, F.F.S., van Dishoeck E.F., Black, J.H. 2005, A&A 432, 369-379

Important:

`spectre.lamda.parse_file` -- function to parse a LAMDA file into `spectre.lamda.LAMDAData`

`spectre.lamda.Line` -- a single emission line with the data of its LAMDA file
"""
from spectre.lamda.data import LAMDAData, Level, RadTransition, CollSet, ColliTransition, CollRate
from spectre.lamda.reader import LAMDAReader, PARTNERS, parse, parse_file
from spectre.lamda.line import Line
