""" Durable boolean preferences, e.g. whether the tutorial was completed. """

import os
import abc
import logging
import tempfile
from typing import Any, Dict, Optional

import toml # type: ignore

from cuecard import config, util


class PreferenceStore(abc.ABC):
    """ Minimal durable key-value store of booleans.

    Values written with set are only guaranteed durable after flush. """

    @abc.abstractmethod
    def get(self, key:str, default:bool=False) -> bool: ...
    @abc.abstractmethod
    def set(self, key:str, value:bool) -> None: ...
    @abc.abstractmethod
    def flush(self) -> None: ...


class MemoryPreferenceStore(PreferenceStore):
    """ Keeps preferences for the life of the process. Counts flushes. """

    def __init__(self, initial:Optional[Dict[str, bool]]=None) -> None:
        self.values:Dict[str, bool] = dict(initial or {})
        self.flushes = 0

    def get(self, key:str, default:bool=False) -> bool:
        return self.values.get(key, default)

    def set(self, key:str, value:bool) -> None:
        self.values[key] = value

    def flush(self) -> None:
        self.flushes += 1


class TomlPreferenceStore(PreferenceStore):
    """ Preferences stored in a flat toml file.

    The file is read once at construction and defaults to Settings.prefs.PATH.
    Entries that aren't booleans are kept and written back untouched, but
    get only reports booleans. flush rewrites the file by writing a temp file
    in the same directory and renaming it over the original, so a crash
    mid-write leaves the previous file intact. """

    def __init__(self, path:Optional[str]=None) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.path = path if path is not None else config.Settings.prefs.PATH
        self._values:Dict[str, Any] = {}
        self._dirty = False
        self._load()

    def _load(self) -> None:
        if not os.path.exists(self.path):
            self.logger.debug(f'no preferences at {self.path}, starting empty')
            return

        try:
            with open(self.path, "rt") as f:
                data = toml.load(f)
        except (OSError, toml.TomlDecodeError) as e:
            self.logger.warning(f'could not read preferences from {self.path}, starting empty: {e}')
            return

        self._values = data
        self.logger.info(f'loaded {len(self._values)} preferences from {self.path}')

    def get(self, key:str, default:bool=False) -> bool:
        value = self._values.get(key, default)
        return value if isinstance(value, bool) else default

    def set(self, key:str, value:bool) -> None:
        if self._values.get(key) is not value:
            self._values[key] = value
            self._dirty = True

    def flush(self) -> None:
        if not self._dirty:
            return

        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        temp_name:Optional[str] = None
        try:
            with tempfile.NamedTemporaryFile("wt", dir=directory, delete=False) as temp_file:
                temp_name = temp_file.name
                toml.dump(self._values, temp_file)
            # move the temp file into final home, so we only end up with good files
            os.replace(temp_name, self.path)
        except Exception:
            if temp_name is not None and os.path.exists(temp_name):
                os.remove(temp_name)
            raise
        self._dirty = False
        self.logger.info(f'saved {len(self._values)} preferences to {self.path}')
