# -*- coding: utf-8 -*-
import os
import errno
import copy
import collections.abc


def mkdir_p(path):
    """ Creates directory ; if exists does nothing """
    try:
        os.makedirs(path)
    except OSError as exc:
        if exc.errno == errno.EEXIST and os.path.isdir(path):
            pass
        else:
            raise exc


class Protected_mapping(collections.abc.Mapping):
    """
    A read-only dictionnary.
    """
    def __init__(self, dic):
        self._dict = dic

    def __getitem__(self, key):
        return copy.deepcopy(self._dict[key])

    def __iter__(self):
        return iter(self._dict)

    def __len__(self):
        return len(self._dict)

    def __setitem__(self, key, value):
        raise RuntimeError("Attempt to modify a Protected_mapping")

    def __delitem__(self, key):
        raise RuntimeError("Attempt to modify a Protected_mapping")


def sign(val):
    """ Sign of a float as -1., 0. or 1. """
    if val > 0.:
        return 1.
    elif val < 0.:
        return -1.
    return 0.
