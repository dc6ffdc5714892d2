"""
Input/Output Manager (HDF5)
Handles saving and loading finished runs to .h5 files.
"""
from __future__ import annotations

import logging
from importlib.metadata import version, PackageNotFoundError
from typing import TYPE_CHECKING

import h5py
import numpy as np

from chaosgame.model.state import RunConfig

if TYPE_CHECKING:
    import numpy.typing as npt

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("chaosgame")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

# HDF5 attributes cannot hold None
_NO_SEED = -1


class IOManager:

    @staticmethod
    def save_run(config: RunConfig, counts: npt.NDArray[np.int64], filepath: str) -> None:
        logger.info(f"Saving run to: {filepath}")
        try:
            with h5py.File(filepath, "w") as f:
                f.attrs["version"] = APP_VERSION

                # --- 1. SAVE CONFIGURATION ---
                grp_cfg = f.create_group("config")
                for key, val in config.to_dict().items():
                    if key == "seed" and val is None:
                        val = _NO_SEED
                    grp_cfg.attrs[key] = val

                # --- 2. SAVE COUNTERS ---
                f.create_dataset("counts", data=np.asarray(counts, dtype=np.int64), compression="gzip")

            logger.info(f"Run saved to: {filepath}")

        except Exception as e:
            logger.exception(f"Failed to save run: {e}")
            raise e

    @staticmethod
    def load_run(filepath: str) -> tuple[RunConfig, npt.NDArray[np.int64]]:
        logger.info(f"Loading run from: {filepath}")
        if not h5py.is_hdf5(filepath):
            msg = f"File '{filepath}' is not a valid HDF5 file."
            logger.error(msg)
            raise ValueError(msg)

        with h5py.File(filepath, "r") as f:
            if "config" not in f or "counts" not in f:
                msg = f"File '{filepath}' does not contain a chaos game run."
                logger.error(msg)
                raise ValueError(msg)

            loaded_values = {}
            for key, val in f["config"].attrs.items():
                # HDF5 hands back numpy scalars, convert to native python
                if hasattr(val, 'item'):
                    val = val.item()
                loaded_values[key] = val
            if loaded_values.get("seed") == _NO_SEED:
                loaded_values["seed"] = None

            config = RunConfig.from_dict(loaded_values)
            counts = f["counts"][()]

        logger.debug(f"Loaded {counts.shape[1]}x{counts.shape[0]} counters.")
        return config, counts
