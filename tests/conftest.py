"""Pytest configuration shared by all tests"""

import sys
from pathlib import Path

import pytest

# Add project root to path for src imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "cs"


@pytest.fixture(scope="session")
def aff_path() -> Path:
    """Small Czech affix file (Hunspell format)"""
    return FIXTURES_DIR / "mini.aff"


@pytest.fixture(scope="session")
def dic_path() -> Path:
    """Small Czech dictionary matching mini.aff"""
    return FIXTURES_DIR / "mini.dic"


@pytest.fixture
def language_files(tmp_path):
    """
    Write affix/dictionary text to temporary files.

    The .aff text gets a "SET UTF-8" line in front unless it declares its
    own SET, so Czech characters survive; line 1 is then that SET line.

    Usage:
        aff, dic = language_files("SFX A N 1\\nSFX A 0 i t\\n", "1\\ndělat/A\\n")
    """
    def write(aff_text, dic_text="0\n"):
        if not aff_text.startswith("SET "):
            aff_text = "SET UTF-8\n" + aff_text
        aff = tmp_path / "test.aff"
        dic = tmp_path / "test.dic"
        aff.write_text(aff_text, encoding="utf-8")
        dic.write_text(dic_text, encoding="utf-8")
        return aff, dic

    return write
