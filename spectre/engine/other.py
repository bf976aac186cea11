import os
from typing import Union

PathLike = Union[str, os.PathLike]


class FrozenDict(dict):
    """
    `dict` which can not be modified after creation, but can be pickled and copied

    >>> frozen = FrozenDict(H2=1)
    >>> frozen["He"] = 2
    Traceback (most recent call last):
       ...
    TypeError: 'FrozenDict' object does not support item assignment
    """

    def _readonly(self, *args, **kwargs):
        raise TypeError(f"'{self.__class__.__name__}' object does not support item assignment")

    __setitem__ = __delitem__ = _readonly
    clear = pop = popitem = setdefault = update = _readonly
    __ior__ = _readonly

    def __reduce__(self):
        return self.__class__, (dict(self),)
