from __future__ import annotations

import os
from os import PathLike
from collections.abc import MutableMapping
from pathlib import Path
from typing import Iterator


class InvalidKeyError(ValueError):
    """Raised when a key can not be used as a plain file name inside the storage root."""


class KeyValueStorage(MutableMapping[str, bytes]):
    """
    A key-value storage that keeps every record in its own file.

    The file name is the key and the file contents are the value, byte for byte, with no
    encoding or framing. There is no index and no cache: a record exists if and only if its
    file exists in the storage root.
    """
    def __init__(self, path: str | PathLike = ".", max_value_length: int = 767) -> None:
        """
        Initialize the key-value storage.

        :param path: the directory holding the records.
        :param max_value_length: the maximum number of bytes returned when a record is read.
        """
        self._path = Path(path)
        self._max_value_length = max_value_length

    @property
    def path(self) -> Path:
        return self._path

    def open(self) -> None:
        """
        Create the storage root if it does not exist yet.
        """
        self._path.mkdir(parents=True, exist_ok=True)

    def record_path(self, key: str) -> Path:
        """
        Resolve the file backing a key.

        :param key: the key of the record.
        :return: the path of the record file.
        :raises InvalidKeyError: if the key is empty, a relative directory reference, or
                                 contains a path separator or a NUL character.
        """
        separators = {os.sep, os.altsep} - {None}
        if key in ("", ".", "..") or "\0" in key or any(sep in key for sep in separators):
            raise InvalidKeyError(f"invalid key {key!r}")
        return self._path / key

    def __getitem__(self, key: str) -> bytes:
        """
        Read a record.

        At most ``max_value_length`` bytes are returned.

        :param key: the key of the record.
        :return: the stored value.
        :raises KeyError: if there is no record for the key.
        :raises OSError: if the record exists but can not be read.
        """
        try:
            with open(self.record_path(key), "rb") as record:
                return record.read(self._max_value_length)
        except FileNotFoundError:
            raise KeyError(key) from None

    def __setitem__(self, key: str, value: bytes) -> None:
        """
        Create or overwrite a record.

        :param key: the key of the record.
        :param value: the value, written as is.
        """
        with open(self.record_path(key), "wb") as record:
            record.write(value)

    def __delitem__(self, key: str) -> None:
        try:
            os.remove(self.record_path(key))
        except FileNotFoundError:
            raise KeyError(key) from None

    def __contains__(self, key: object) -> bool:
        try:
            return isinstance(key, str) and self.record_path(key).is_file()
        except InvalidKeyError:
            return False

    def __iter__(self) -> Iterator[str]:
        for entry in sorted(self._path.iterdir()):
            if entry.is_file():
                yield entry.name

    def __len__(self) -> int:
        return sum(1 for _ in self)
