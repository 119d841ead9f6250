from __future__ import annotations

import os
import shutil
import uuid
from pathlib import Path

import pytest


_TEST_ROOT = Path(__file__).resolve().parent / ".tmp_test_env"
_APPDATA = _TEST_ROOT / "AppData" / "Roaming"
_HOME = _TEST_ROOT / "home"
_TMP = _TEST_ROOT / "tmp"
_TMP_CASES = _TEST_ROOT / "pytest_cases"

for _path in (_APPDATA, _HOME, _TMP, _TMP_CASES):
    _path.mkdir(parents=True, exist_ok=True)

# Log files land under the per-user config directory; keep them inside the test tree
os.environ["APPDATA"] = str(_APPDATA)
os.environ["HOME"] = str(_HOME)
os.environ["USERPROFILE"] = str(_HOME)
os.environ["TMP"] = str(_TMP)
os.environ["TEMP"] = str(_TMP)
os.environ["TMPDIR"] = str(_TMP)
os.environ.pop("CANTODICT_CONFIG", None)


@pytest.fixture
def tmp_path():
    case_path = _TMP_CASES / f"case_{uuid.uuid4().hex}"
    case_path.mkdir(parents=True, exist_ok=False)
    try:
        yield case_path
    finally:
        shutil.rmtree(case_path, ignore_errors=True)
