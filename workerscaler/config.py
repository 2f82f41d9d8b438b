import os
from typing import Dict, Any, Optional, NamedTuple


class ScalingConfig(NamedTuple):
    """Configuration for the worker scaler."""
    # Proportional need
    worker_to_job_ratio: float = 1.0

    # Machine shape
    cpu_per_machine: int = 1
    fix_used_cpu: int = 0

    # Bounds
    boost_min_worker: int = 0
    min_worker: int = 1
    max_worker: int = 6

    # Tick period in milliseconds
    scale_interval: int = 5000


# option name -> (environment variable, parser)
_OPTIONS = {
    'worker_to_job_ratio': ('WORKER_TO_JOB_RATIO', float),
    'cpu_per_machine': ('CPU_PER_MACHINE', int),
    'fix_used_cpu': ('FIX_USED_CPU', int),
    'boost_min_worker': ('BOOST_MIN_WORKER', int),
    'min_worker': ('MIN_WORKER', int),
    'max_worker': ('MAX_WORKER', int),
    'scale_interval': ('SCALE_INTERVAL', int),
}


def _option(overrides: Dict[str, Any], name: str) -> Optional[Any]:
    env_name, parse = _OPTIONS[name]

    value = overrides.get(name)
    if value is None:
        value = os.environ.get(env_name)
    if value is None:
        return None
    return parse(value)


def load_config(overrides: Dict[str, Any] = None) -> ScalingConfig:
    """
    Load configuration from environment variables and an optional overrides mapping.

    Override values win over environment variables when present. Options that
    are set in neither place keep the ScalingConfig defaults. Values are not
    validated beyond numeric parsing, so e.g. max_worker < min_worker is accepted.

    Args:
        overrides: Optional mapping of ScalingConfig field names to values

    Returns:
        ScalingConfig: Configuration object with all scaler settings

    Raises:
        ValueError: If a value cannot be parsed as a number
    """
    overrides = overrides or {}

    options = {}
    for name in _OPTIONS:
        value = _option(overrides, name)
        if value is not None:
            options[name] = value

    return ScalingConfig(**options)
