from .publisher import DEFAULT_BATCH_SIZE, OutboxPublisher
from .worker import OutboxWorker

__all__ = ["DEFAULT_BATCH_SIZE", "OutboxPublisher", "OutboxWorker"]
