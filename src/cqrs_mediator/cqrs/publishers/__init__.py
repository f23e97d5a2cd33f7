from .dispatching import DispatchingEventPublisher
from .fan_out import FanOutPublisher

__all__ = ["DispatchingEventPublisher", "FanOutPublisher"]
