"""
Generator Configuration.

Defaults reproduce the fixed grammar: variants go into ``pub enum Call`` of
the sibling ``call.rs`` and calls delegate through ``simple!``. A project can
override these under ``[tool.stub_delegator]`` in its ``pyproject.toml``;
explicit arguments (e.g. from the CLI) override both.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

TOOL_SECTION = "stub_delegator"


class GeneratorConfig(BaseModel):
  """
  Settings for one generator run.
  """

  companion_file: str = Field("call.rs", description="Sibling file holding the enum, relative to the edited file.")
  enum_name: str = Field("Call", description="Enum that receives one variant per generated method.")
  macro_name: str = Field("simple", description="Macro the generated body delegates through.")

  @field_validator("enum_name", "macro_name")
  @classmethod
  def validate_identifier(cls, v: str) -> str:
    """
    Ensures the value can be spliced into Rust source as a bare identifier.

    Raises:
        ValueError: If the value is not an identifier.
    """
    v_clean = v.strip()
    if not v_clean.isidentifier():
      raise ValueError(f"'{v}' is not a valid identifier")
    return v_clean

  def companion_path(self, primary_path: Path) -> Path:
    """Resolves the companion file next to ``primary_path``."""
    return primary_path.parent / self.companion_file

  @classmethod
  def load(
    cls,
    companion_file: Optional[str] = None,
    enum_name: Optional[str] = None,
    macro_name: Optional[str] = None,
    search_path: Optional[Path] = None,
  ) -> "GeneratorConfig":
    """
    Loads configuration from pyproject.toml and applies overrides.

    Args:
        companion_file: Override for the companion file name.
        enum_name: Override for the target enum.
        macro_name: Override for the delegation macro.
        search_path: Directory to start searching for TOML config.

    Returns:
        GeneratorConfig: The resolved configuration.
    """
    toml_config, _ = _load_toml_settings(search_path or Path.cwd())

    overrides = {
      "companion_file": companion_file,
      "enum_name": enum_name,
      "macro_name": macro_name,
    }
    merged: Dict[str, Any] = {k: v for k, v in toml_config.items() if k in cls.model_fields}
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return cls(**merged)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches ``start_path`` and its parents for 'pyproject.toml' and extracts our section.

  Args:
      start_path: Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None
      return data.get("tool", {}).get(TOOL_SECTION, {}), parent

  return {}, None
