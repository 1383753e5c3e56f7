"""Filesystem capability used by scope stores and the built-in provider.

Stores never touch ``pathlib`` directly; they go through a ``FileSystem`` so
tests can swap in ``MemoryFileSystem`` and run without touching disk.

Paths cross this boundary as strings.
"""

import posixpath
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileStat:
    size: int
    mtime: float
    is_file: bool
    is_dir: bool


class FileSystem(ABC):
    """Minimal set of filesystem operations the core depends on."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def is_file(self, path: str) -> bool:
        pass

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        pass

    @abstractmethod
    def read_text(self, path: str) -> str:
        pass

    @abstractmethod
    def write_text(self, path: str, content: str) -> None:
        pass

    @abstractmethod
    def mkdir(self, path: str, parents: bool = True) -> None:
        """Create a directory. Existing directories are not an error."""

    @abstractmethod
    def listdir(self, path: str) -> list[str]:
        """Return entry names (not paths) in sorted order."""

    @abstractmethod
    def stat(self, path: str) -> FileStat:
        pass

    @abstractmethod
    def remove(self, path: str) -> None:
        pass

    @abstractmethod
    def join(self, *parts: str) -> str:
        pass

    @abstractmethod
    def dirname(self, path: str) -> str:
        pass

    @abstractmethod
    def basename(self, path: str) -> str:
        pass

    @abstractmethod
    def stem(self, path: str) -> str:
        """File name without its final extension."""

    @abstractmethod
    def suffix(self, path: str) -> str:
        """Final extension including the dot, or '' if none."""


class LocalFileSystem(FileSystem):
    """FileSystem backed by the local disk via pathlib."""

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def is_file(self, path: str) -> bool:
        return Path(path).is_file()

    def is_dir(self, path: str) -> bool:
        return Path(path).is_dir()

    def read_text(self, path: str) -> str:
        return Path(path).read_text(encoding="utf-8")

    def write_text(self, path: str, content: str) -> None:
        Path(path).write_text(content, encoding="utf-8")

    def mkdir(self, path: str, parents: bool = True) -> None:
        Path(path).mkdir(parents=parents, exist_ok=True)

    def listdir(self, path: str) -> list[str]:
        return sorted(entry.name for entry in Path(path).iterdir())

    def stat(self, path: str) -> FileStat:
        p = Path(path)
        st = p.stat()
        return FileStat(size=st.st_size, mtime=st.st_mtime, is_file=p.is_file(), is_dir=p.is_dir())

    def remove(self, path: str) -> None:
        Path(path).unlink()

    def join(self, *parts: str) -> str:
        return str(Path(*parts))

    def dirname(self, path: str) -> str:
        return str(Path(path).parent)

    def basename(self, path: str) -> str:
        return Path(path).name

    def stem(self, path: str) -> str:
        return Path(path).stem

    def suffix(self, path: str) -> str:
        return Path(path).suffix


class MemoryFileSystem(FileSystem):
    """
    In-memory FileSystem for deterministic tests.

    Files are stored as POSIX path -> text. Directories exist when created
    with ``mkdir`` or when they are an ancestor of a stored file.

    Example:
        fs = MemoryFileSystem({
            "/project/.zcc/config.yaml": "defaultMode: architect\\n",
            "/project/.zcc/modes/engineer.md": "---\\ndescription: Builds\\n---\\n",
        })
    """

    def __init__(self, files: dict[str, str] | None = None):
        self._files: dict[str, str] = {}
        self._mtimes: dict[str, float] = {}
        self._dirs: set[str] = {"/"}
        for path, content in (files or {}).items():
            self.write_text(path, content)

    @staticmethod
    def _norm(path: str) -> str:
        return posixpath.normpath(str(path))

    def _add_parents(self, path: str) -> None:
        parent = posixpath.dirname(path)
        while parent and parent not in self._dirs:
            self._dirs.add(parent)
            parent = posixpath.dirname(parent)

    def exists(self, path: str) -> bool:
        path = self._norm(path)
        return path in self._files or path in self._dirs

    def is_file(self, path: str) -> bool:
        return self._norm(path) in self._files

    def is_dir(self, path: str) -> bool:
        return self._norm(path) in self._dirs

    def read_text(self, path: str) -> str:
        path = self._norm(path)
        if path not in self._files:
            raise FileNotFoundError(path)
        return self._files[path]

    def write_text(self, path: str, content: str) -> None:
        path = self._norm(path)
        if path in self._dirs:
            raise IsADirectoryError(path)
        self._add_parents(path)
        self._files[path] = content
        self._mtimes[path] = time.time()

    def mkdir(self, path: str, parents: bool = True) -> None:
        path = self._norm(path)
        if path in self._files:
            raise FileExistsError(path)
        if not parents and posixpath.dirname(path) not in self._dirs:
            raise FileNotFoundError(posixpath.dirname(path))
        self._add_parents(path)
        self._dirs.add(path)

    def listdir(self, path: str) -> list[str]:
        path = self._norm(path)
        if path not in self._dirs:
            raise FileNotFoundError(path)
        names = {
            posixpath.basename(entry)
            for entry in list(self._files) + list(self._dirs)
            if entry != path and posixpath.dirname(entry) == path
        }
        return sorted(names)

    def stat(self, path: str) -> FileStat:
        path = self._norm(path)
        if path in self._files:
            return FileStat(
                size=len(self._files[path].encode("utf-8")),
                mtime=self._mtimes[path],
                is_file=True,
                is_dir=False,
            )
        if path in self._dirs:
            return FileStat(size=0, mtime=0.0, is_file=False, is_dir=True)
        raise FileNotFoundError(path)

    def remove(self, path: str) -> None:
        path = self._norm(path)
        if path not in self._files:
            raise FileNotFoundError(path)
        del self._files[path]
        del self._mtimes[path]

    def join(self, *parts: str) -> str:
        return posixpath.join(*[str(p) for p in parts])

    def dirname(self, path: str) -> str:
        return posixpath.dirname(self._norm(path))

    def basename(self, path: str) -> str:
        return posixpath.basename(self._norm(path))

    def stem(self, path: str) -> str:
        return posixpath.splitext(self.basename(path))[0]

    def suffix(self, path: str) -> str:
        return posixpath.splitext(self.basename(path))[1]
