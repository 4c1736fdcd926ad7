"""Global random seed management for reproducible training runs."""

import random
import numpy as np
from typing import Optional
import os
import hashlib

SEED_ENV_VAR = 'LOGLINEAR_COST_SEED'

# Global random state storage
_GLOBAL_SEED: Optional[int] = None

def set_global_seed(seed: int) -> None:
    """Set global random seed for Python's ``random`` and NumPy.

    Random parameter initialisation and synthetic problems fall back to the
    global NumPy state, so seeding here makes a whole run reproducible.

    Parameters
    ----------
    seed : int
        Random seed value
    """
    global _GLOBAL_SEED

    _GLOBAL_SEED = seed
    random.seed(seed)
    np.random.seed(seed)

def get_global_seed() -> Optional[int]:
    """Return the current global seed, or None if never set."""
    return _GLOBAL_SEED

def create_deterministic_seed(base_string: str) -> int:
    """Create a deterministic seed from a string.

    Parameters
    ----------
    base_string : str
        String to hash, e.g. an experiment name

    Returns
    -------
    int
        Seed in [0, 2**31 - 1)

    Examples
    --------
    >>> seed = create_deterministic_seed("pos-tagger-v2")
    >>> set_global_seed(seed)
    """
    hash_hex = hashlib.sha256(base_string.encode()).hexdigest()
    return int(hash_hex[:8], 16) % (2**31 - 1)

def get_environment_seed(default: Optional[int] = None) -> Optional[int]:
    """Read a seed from the ``LOGLINEAR_COST_SEED`` environment variable.

    Non-integer values are hashed with :func:`create_deterministic_seed`.
    Returns ``default`` when the variable is unset or empty.
    """
    env_seed = os.environ.get(SEED_ENV_VAR)

    if env_seed is None or env_seed == '':
        return default
    try:
        return int(env_seed)
    except ValueError:
        return create_deterministic_seed(env_seed)
