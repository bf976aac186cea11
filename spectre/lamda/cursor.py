"""Sequential single-pass reader over the lines of a LAMDA file"""
from typing import Iterable, Union

from spectre.engine.exceptions import LAMDAIOError, UnexpectedEndOfInput


class LineCursor:
    """
    Reads the lines of a stream one by one, without look-ahead

    Accepts any iterable of lines: open text or binary files, `io.StringIO`, lists of strings.
    Bytes are decoded with `encoding`.

    Usage:
    >>> cursor = LineCursor(["!MOLECULE\\n", "CO\\n"])
    >>> cursor.skip_line("molecule header")
    >>> cursor.next_line("molecule name")
    'CO'
    >>> cursor.line_number
    2
    >>> cursor.next_line("molecular weight header")
    Traceback (most recent call last):
       ...
    spectre.engine.exceptions.UnexpectedEndOfInput: Missing molecular weight header, end of input after line 2
    """

    def __init__(self, stream: Iterable[Union[str, bytes]], encoding: str = "utf-8", section: str = None):
        self._lines = iter(stream)
        self.encoding = encoding
        self.section = section
        self.line_number = 0

    def next_line(self, what: str = "line") -> str:
        """
        Returns the next line without the trailing newline

        Args:
            what: description of the expected line, used in the error message

        Raises:
            UnexpectedEndOfInput: if the stream is exhausted
            LAMDAIOError: if the stream can not be read
        """
        try:
            line = next(self._lines)
        except StopIteration:
            raise UnexpectedEndOfInput(
                f"Missing {what}, end of input after line {self.line_number}", section=self.section
            ) from None
        except (OSError, UnicodeDecodeError) as err:
            raise LAMDAIOError(f"Failed reading line {self.line_number + 1}: {err}") from err
        self.line_number += 1
        if isinstance(line, bytes):
            try:
                line = line.decode(self.encoding)
            except UnicodeDecodeError as err:
                raise LAMDAIOError(f"Failed decoding line {self.line_number}: {err}") from err
        return line.rstrip("\r\n")

    def skip_line(self, what: str = "comment line") -> None:
        """Consumes exactly one line, whatever it contains"""
        self.next_line(what)
