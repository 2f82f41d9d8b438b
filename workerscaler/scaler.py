import logging
import math


def ceil_to_nearest(job_count, worker_to_job_ratio, cpu_per_machine):
    """
    Round the proportional worker need up to a whole number of machines.

    The division is done in floating point, so 30 jobs at a 0.1 ratio on
    3-CPU machines (30 * 0.1 == 3.0000000000000004) round up to 2 machines.
    """
    return math.ceil(job_count * worker_to_job_ratio / cpu_per_machine) * cpu_per_machine


def calculate_ideal_worker_target(job_count, config):
    """
    Calculate the ideal worker count for the given number of jobs.

    Scaling to a fraction of the jobs in the system keeps workers alive until
    their jobs are done. Targets are provisioned in whole machines, less the
    CPUs already used by other services on each machine.

    Things to watch out for:
      - jobs stuck in active/inactive state keep the target up, so workers
        never scale down while they linger

    Args:
        job_count: Total jobs in the system
        config: ScalingConfig with the scaling parameters

    Returns:
        int: Worker target, between min_worker and max_worker
    """
    worker_target = ceil_to_nearest(job_count, config.worker_to_job_ratio, config.cpu_per_machine)
    worker_target -= config.fix_used_cpu

    if worker_target < config.min_worker:
        worker_target = config.min_worker

    # Jump to boost_min_worker ahead of demand. Jobs above the minimum usually
    # mean a full batch is coming, so cold starts are paid once for the batch.
    if config.min_worker < worker_target < config.boost_min_worker:
        worker_target = config.boost_min_worker

    # Above boost_min_worker the rounded target is used as is

    if worker_target > config.max_worker:
        worker_target = config.max_worker

    logging.debug(
        f"Ideal worker target for {job_count} jobs is {worker_target} "
        f"(ratio={config.worker_to_job_ratio}, cpu_per_machine={config.cpu_per_machine}, "
        f"fix_used_cpu={config.fix_used_cpu}, boost_min_worker={config.boost_min_worker}, "
        f"min_worker={config.min_worker}, max_worker={config.max_worker})")
    return worker_target
