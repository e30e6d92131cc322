# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/09/08 20:22:30
# @Author : pyini contributors

from abc import ABCMeta, abstractmethod
from typing import Generic, TypeVar

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    """Binds a document type to one file on disk."""
    def __init__(self, filename: str, encoding: str | None = None) -> None:
        self._fn = filename.strip()
        self._codec = encoding
        self.nread = 0

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> int:
        """Returns the number of bytes written."""
        raise NotImplementedError

    @property
    def filename(self) -> str:
        return self._fn

    def __str__(self) -> str:
        return self._fn
