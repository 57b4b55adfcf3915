# fiva/utils/seeding.py
from __future__ import annotations
import os
import random
from typing import Any, Dict

import numpy as np


def set_seeds_from_cfg(cfg: Dict[str, Any], path: str) -> int:
    seed = cfg.get(path, {}).get("seed", "random")
    if seed is None or seed == "random":
        seed = int(np.random.randint(2 ** 24))
    else:
        seed = int(seed)

    set_all_seeds(seed)

    return seed


def set_all_seeds(seed: int) -> None:
    seed = int(seed)
    os.environ["PYTHONHASHSEED"] = str(seed)
    random.seed(seed)
    np.random.seed(seed)
