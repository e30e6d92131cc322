# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2023/11/14 20:01:52
# @Author : pyini contributors

import logging

from .ini import (
    DEF_SECTION,
    IniKeyVal,
    IniSection,
    IniSectionList,
    IniParser,
    SectionOrderError,
    load,
    loads,
    read_ini_data
)

__all__ = [
    'DEF_SECTION', 'IniKeyVal', 'IniSection', 'IniSectionList',
    'IniParser', 'SectionOrderError',
    'load', 'loads', 'read_ini_data'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
