# -*- encoding: utf-8 -*-
# @File   : lookup.py
# @Time   : 2024/10/13 15:02:51
# @Author : pyini contributors

"""Load an application's INI from the usual places, later ones winning.

Nothing here scans `sys.argv`: a command line `-ini <file>` is just
one more entry for `extra`.
"""

import logging
import os
from collections.abc import Iterable
from os.path import abspath, expanduser, join

from .model import DEF_SECTION, IniSection, IniSectionList
from .parser import load


def candidate_paths(name: str, extra: Iterable[str] = ()) -> list[str]:
    """Conventional locations of `name`'s INI, lowest priority first.

    1. `./name.ini`
    2. `/etc/name.ini`
    3. `~/.name.ini`
    4. `$XDG_CONFIG_HOME/name.ini` (`~/.config/name.ini` if unset)
    5. anything in `extra`, in the given order
    """
    home = expanduser('~')
    confdir = os.environ.get('XDG_CONFIG_HOME') or join(home, '.config')
    ret = [
        join('.', f'{name}.ini'),
        join('/etc', f'{name}.ini'),
        join(home, f'.{name}.ini'),
        join(confdir, f'{name}.ini'),
        *extra
    ]
    return [abspath(i) for i in ret]


def load_candidates(
    paths: Iterable[str], default_section: str = DEF_SECTION
) -> IniSectionList:
    """`load()` and `merge()` each of `paths` that can be read.

    The default section's `iniFile` key names the last file merged,
    which also becomes the result's filename.
    """
    ret = IniSectionList(default_section)
    for i in paths:
        try:
            ini = load(i, default_section=default_section)
        except FileNotFoundError:
            logging.debug(f'No INI at {i}.')
            continue
        except (OSError, UnicodeError) as e:
            # unreadable or undecodable.
            logging.warning(f"INI candidate skipped:\n  {e}")
            continue
        ret.merge(ini)
        ret.add_section_key('', 'iniFile', i)
        ret.set_filename(i)
    return ret


def read_ini_data(name: str, extra: Iterable[str] = ()) -> IniSection:
    """Default section of everything found by `candidate_paths()`."""
    return load_candidates(candidate_paths(name, extra)).get_section('')
