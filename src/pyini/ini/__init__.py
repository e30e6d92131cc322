# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/10 01:16:53
# @Author : pyini contributors

from .model import (
    DEF_SECTION,
    IniKeyVal,
    IniSection,
    IniSectionList,
    SectionOrderError
)
from .parser import IniParser, LineReader, load, loads, remove_quotes
from .lookup import candidate_paths, load_candidates, read_ini_data
