"""
Middleware for EventBus

Middleware = pipeline functions that process events before handlers.
Can modify events, block events, or log/validate events.
"""

from models.enums import LogCategory
from models.events import Event
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.EVENT)


def log_middleware(event: Event) -> Event:
    """
    Log all events for debugging

    Usage:
        event_bus.add_middleware(log_middleware)
    """
    source_str = event.source.name if event.source is not None else "-"

    data = event.to_data()
    data_str = ", ".join(
        f"{k}={v.name if hasattr(v, 'name') else v}" for k, v in data.items()
    )

    log.debug(f"Event: {event.type.name} from {source_str} | {data_str}")
    return event
