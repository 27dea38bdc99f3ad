# -*- encoding: utf-8 -*-
# @File   : config.py
# @Time   : 2024/10/14 10:02:55
# @Author : Kariko Lin

"""Where the default parameter file lives.

1. `PYINIARCHIVE_PARAMETERS`, if set, is the file itself.
2. Otherwise `<install path>/data/parameters.ini`, where the install
path comes from `PYINIARCHIVE_INSTALL_PATH`.
"""

import logging
import os
from collections.abc import Mapping
from os.path import join

PARAMETERS_ENV = 'PYINIARCHIVE_PARAMETERS'
INSTALL_PATH_ENV = 'PYINIARCHIVE_INSTALL_PATH'

DEFAULT_INSTALL_PATH = '.'
PARAMETERS_FILENAME = 'parameters.ini'


def resolve_parameter_file(environ: Mapping[str, str] | None = None) -> str:
    if environ is None:
        environ = os.environ
    if ret := environ.get(PARAMETERS_ENV):
        return ret

    install_path = environ.get(INSTALL_PATH_ENV)
    if not install_path:
        install_path = DEFAULT_INSTALL_PATH
        logging.warning(
            f'{INSTALL_PATH_ENV} not set, using default: {install_path}')
    return join(install_path, 'data', PARAMETERS_FILENAME)
