import itertools
import os

import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")


@pytest.fixture()
def data_dir() -> str:
    return DATA_DIR


@pytest.fixture()
def complete_10_text() -> str:
    # K10 without any metadata lines
    lines = ["p edge 10 45"]
    lines += [f"e {u} {v}" for u, v in itertools.combinations(range(1, 11), 2)]
    return "\n".join(lines) + "\n"
