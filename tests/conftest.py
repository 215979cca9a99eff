"""Shared test fixtures."""

from pathlib import Path

import pytest

from mlcts.dictionary import Dictionary


def find_data(filename: str) -> Path | None:
    """Find a data file relative to the project root."""
    for base in [Path("data"), Path("../data")]:
        p = base / filename
        if p.exists():
            return p
    return None


# Attested (myanmar, mlcts) pairs.
SAMPLE_PAIRS = [
    ("\u1019\u103C\u1014\u103A\u1019\u102C", "mranma"),        # မြန်မာ
    ("\u1000\u1019\u1039\u1018\u102C", "kambha"),         # ကမ္ဘာ
    ("\u1000\u103B\u1031\u102C\u1004\u103A\u1038", "kyaung:"),      # ကျောင်း
    ("\u1005\u102C\u1038", "ca:"),              # စား
    ("\u1015\u102B", "pa"),                # ပါ
    ("\u1015\u102D\u103F\u102C", "pissa"),           # ပိဿာ
    ("\u1017\u102D\u102F\u101C\u103A", "buil"),            # ဗိုလ်
    ("\u1000\u102F\u101E\u102D\u102F\u101C\u103A", "ku.suil"),       # ကုသိုလ်
    ("\u1010\u1000\u1039\u1000\u101E\u102D\u102F\u101C\u103A", "takka.suil"),  # တက္ကသိုလ်
    ("\u101E\u102F\u1036\u1038", "sum:"),             # သုံး
    ("\u1000\u1036", "kam"),               # ကံ
    ("\u1026\u1038", "u:"),                # ဦး
    ("\u1004\u103E\u102C\u1038", "hnga:"),            # ငှား
]


@pytest.fixture
def sample_dictionary() -> Dictionary:
    """A small in-memory dictionary."""
    return Dictionary.from_pairs(SAMPLE_PAIRS, source="sample")


@pytest.fixture
def sample_csv() -> Path:
    """The sample dictionary shipped in data/. Skips if not found."""
    p = find_data("sample-mlcts-dict.csv")
    if p is None:
        pytest.skip("data/sample-mlcts-dict.csv not found")
    return p
