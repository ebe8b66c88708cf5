"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Representative recorder source and ``call.rs`` companion texts.
- Console isolation so tests that swap the Rich backend do not leak.
"""

import sys
import textwrap
from pathlib import Path

import pytest

# Add src to path so we can import 'stub_delegator' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from stub_delegator.utils.console import reset_console  # noqa: E402

RECORDER_SOURCE = textwrap.dedent(
  """\
  impl<G: Gl> Gl for Recorder<G> {
      fn active_texture(&self, texture: GLenum) {
          simple!(self.active_texture(texture))
      }

      fn compute(&self, width: u32, label: &str) { unimplemented!("todo"); }

      unsafe fn get_error(&self) -> GLenum {
          unimplemented!("get_error");
      }

      fn buffer_data_untyped(&self,
                             target: GLenum,
                             size_data: &[u8],
                             usage: GLenum,) {
          unimplemented!("buffer_data_untyped");
      }
  }
  """
)

CALL_SOURCE = textwrap.dedent(
  """\
  use serde::{Deserialize, Serialize};

  #[derive(Debug, Serialize, Deserialize)]
  #[allow(non_camel_case_types)]
  pub enum Call {
      active_texture { texture: GLenum, },
      viewport { x: GLint, y: GLint, width: GLsizei, height: GLsizei },
  }

  impl Call {
      pub fn is_draw(&self) -> bool { false }
  }
  """
)


@pytest.fixture
def recorder_source() -> str:
  return RECORDER_SOURCE


@pytest.fixture
def call_source() -> str:
  return CALL_SOURCE


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
  """
  Writes a minimal crate layout.

  /src
     recorder.rs
     call.rs
  """
  src = tmp_path / "src"
  src.mkdir()
  (src / "recorder.rs").write_text(RECORDER_SOURCE, encoding="utf-8")
  (src / "call.rs").write_text(CALL_SOURCE, encoding="utf-8")
  return src


@pytest.fixture(autouse=True)
def isolate_console():
  """Restores the default console after tests that inject their own."""
  yield
  reset_console()
