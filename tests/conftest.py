import sys
from pathlib import Path

import matplotlib
import numpy as np
import pytest

# Add the 'src' directory to sys.path so tests can import the package
# without installing it.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / 'src'))

matplotlib.use("Agg")


@pytest.fixture
def rng():
    return np.random.default_rng(12345)
