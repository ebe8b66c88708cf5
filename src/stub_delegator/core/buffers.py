"""
Text Buffer Abstractions.

The generator never touches the filesystem directly. The primary buffer only
needs read access and region replacement; the companion (secondary) file
additionally needs ``save``. Both are expressed as small abstract classes so
an editor integration, a file on disk, or an in-memory fake can be injected.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional


class TextBuffer(ABC):
  """Readable text with region replacement."""

  @property
  @abstractmethod
  def text(self) -> str:
    """Current full text of the buffer."""

  @abstractmethod
  def _set_text(self, new_text: str) -> None:
    """Stores the complete new text."""

  def replace_region(self, start: int, end: int, new_text: str) -> None:
    """
    Replaces ``text[start:end]`` with ``new_text``.

    Args:
        start: Inclusive start offset.
        end: Exclusive end offset.
        new_text: Replacement text.

    Raises:
        ValueError: If the region is outside the buffer or inverted.
    """
    current = self.text
    if not 0 <= start <= end <= len(current):
      raise ValueError(f"Invalid region ({start}, {end}) for buffer of length {len(current)}")
    self._set_text(current[:start] + new_text + current[end:])

  def insert(self, offset: int, new_text: str) -> None:
    self.replace_region(offset, offset, new_text)


class SecondaryFile(TextBuffer):
  """A buffer that can be persisted."""

  @abstractmethod
  def save(self) -> None:
    """
    Persists the current text.

    Raises:
        OSError: If the underlying storage rejects the write.
    """


class InMemoryBuffer(SecondaryFile):
  """
  Buffer held entirely in memory.

  ``save`` only records that it was called, which makes the class usable as
  the companion file in tests and dry runs.
  """

  def __init__(self, text: str = "", name: str = "<memory>") -> None:
    self._text = text
    self.name = name
    self.save_count = 0

  @property
  def text(self) -> str:
    return self._text

  def _set_text(self, new_text: str) -> None:
    self._text = new_text

  def save(self) -> None:
    self.save_count += 1

  def __repr__(self) -> str:
    return f"InMemoryBuffer(name={self.name!r}, length={len(self._text)})"


class FileBuffer(SecondaryFile):
  """
  Buffer backed by a file on disk.

  The file is read on first access and written back only on ``save``.
  """

  def __init__(self, path: Path, encoding: str = "utf-8") -> None:
    self.path = Path(path)
    self.encoding = encoding
    self._text: Optional[str] = None
    self.dirty = False

  @property
  def name(self) -> str:
    return str(self.path)

  @property
  def text(self) -> str:
    if self._text is None:
      self._text = self.path.read_text(encoding=self.encoding)
    return self._text

  def _set_text(self, new_text: str) -> None:
    self._text = new_text
    self.dirty = True

  def save(self) -> None:
    self.path.write_text(self.text, encoding=self.encoding)
    self.dirty = False

  def __repr__(self) -> str:
    return f"FileBuffer(path={self.path!r})"
