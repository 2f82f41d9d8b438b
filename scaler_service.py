"""
Entry point for running the worker scaler as a standalone service.
"""

# Configure logging first
from workerscaler.common.logger import setup_logging

setup_logging()

from workerscaler.main import main


if __name__ == '__main__':
    main()
