"""
Worker scaler for job queues.

This package computes the ideal number of workers for the jobs currently in a
queue and hands that target to a caller-supplied scaling action on a fixed
interval.
"""

from workerscaler.config import ScalingConfig, load_config
from workerscaler.controller import JobStats, WorkerScaler
from workerscaler.scaler import calculate_ideal_worker_target

__version__ = "0.1.0"
