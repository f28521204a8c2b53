"""Effect layer.

Watches the store's intent stream and turns trigger intents into remote
calls on the task service.  Results come back only as intents.
"""

from tasksync.effects.coordinator import EffectCoordinator
from tasksync.effects.workers import DEFAULT_WORKERS, Worker

__all__ = ["DEFAULT_WORKERS", "EffectCoordinator", "Worker"]
