"""
Event Bus - Central event routing system

Implements pub-sub pattern:
- Publishers: publish(event) / publish_nowait(event)
- Subscribers: subscribe(event_type, handler, priority, filter_fn)
- Middleware: add_middleware(middleware_fn)
"""

import asyncio
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Set

from models.enums import LogCategory
from models.events import Event, EventType
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.EVENT)


@dataclass
class EventHandler:
    """Event handler registration"""
    handler: Callable[[Event], None]
    priority: int
    filter_fn: Optional[Callable[[Event], bool]]


class EventBus:
    """
    Central event bus for pub-sub event handling

    Features:
    - Priority-based handler execution (high priority first)
    - Per-handler filtering (fine-grained control)
    - Middleware pipeline (logging, blocking)
    - Async/sync handler support (auto-detected)
    - Fault tolerance (one handler crash doesn't stop others)

    Example:
        bus = EventBus()

        bus.subscribe(
            EventType.EFFECT_STOPPED,
            handler_fn,
            priority=10,
            filter_fn=lambda e: e.reason == StopReason.COMPLETED
        )

        await bus.publish(EffectStoppedEvent(EffectID.STROBE, StopReason.COMPLETED))
    """

    def __init__(self, history_limit: int = 100):
        # Handlers organized by event type
        self._handlers: Dict[EventType, List[EventHandler]] = {}

        # Middleware pipeline (applied in registration order)
        self._middleware: List[Callable[[Event], Optional[Event]]] = []

        # Event history (circular buffer for debugging)
        self._event_history: List[Event] = []
        self._history_limit = history_limit

        # Keeps references to tasks spawned by publish_nowait
        self._pending_tasks: Set[asyncio.Task] = set()

    def subscribe(
        self,
        event_type: EventType,
        handler: Callable[[Event], None],
        priority: int = 0,
        filter_fn: Optional[Callable[[Event], bool]] = None
    ) -> None:
        """
        Subscribe to event type

        Args:
            event_type: Which events to listen for
            handler: Function to call (can be async or sync)
            priority: Execution priority (higher = called first, default: 0)
            filter_fn: Optional filter (return True = handle, False = skip)
        """
        if event_type not in self._handlers:
            self._handlers[event_type] = []

        handler_entry = EventHandler(handler, priority, filter_fn)
        self._handlers[event_type].append(handler_entry)

        # Sort by priority (descending - highest first)
        self._handlers[event_type].sort(key=lambda h: h.priority, reverse=True)

        log.debug(
            "Event handler subscribed",
            event_type=event_type.name,
            handler=getattr(handler, "__name__", repr(handler)),
            priority=priority
        )

    def unsubscribe(self, event_type: EventType, handler: Callable[[Event], None]) -> bool:
        """Remove handler; returns False if it wasn't subscribed"""
        entries = self._handlers.get(event_type, [])
        for entry in entries:
            if entry.handler == handler:
                entries.remove(entry)
                return True
        return False

    def add_middleware(self, middleware: Callable[[Event], Optional[Event]]) -> None:
        """
        Add middleware to event processing pipeline

        Middleware can:
        - Modify events (return modified event)
        - Block events (return None)
        - Log/validate events

        Middleware runs in registration order (FIFO).
        """
        self._middleware.append(middleware)
        log.debug("Middleware registered", middleware=getattr(middleware, "__name__", repr(middleware)))

    def _prepare(self, event: Event) -> Optional[tuple]:
        """Run middleware, record history, select handlers. None = nothing to do."""
        for middleware in self._middleware:
            processed_event = middleware(event)
            if processed_event is None:
                return None
            event = processed_event

        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

        handlers = [
            entry for entry in self._handlers.get(event.type, [])
            if not entry.filter_fn or entry.filter_fn(event)
        ]
        if not handlers:
            log.debug("No handlers for event", event_type=event.type.name)
            return None
        return event, handlers

    async def publish(self, event: Event) -> None:
        """
        Publish event to all subscribers

        Flow:
        1. Apply middleware (can modify or block event)
        2. Save to event history
        3. Lookup handlers for event type, apply per-handler filters
        4. Execute handlers by priority (high -> low), async or sync
        5. Catch and log handler exceptions (fault tolerance)
        """
        prepared = self._prepare(event)
        if prepared is None:
            return
        event, handlers = prepared

        for handler_entry in handlers:
            try:
                if asyncio.iscoroutinefunction(handler_entry.handler):
                    await handler_entry.handler(event)
                else:
                    handler_entry.handler(event)
            except Exception as e:
                self._log_handler_failure(handler_entry, event, e)

    def publish_nowait(self, event: Event) -> None:
        """
        Publish from synchronous code (timer callbacks, scheduler hooks)

        Sync handlers run immediately, in priority order. Async handlers are
        scheduled as tasks on the running loop; without a running loop they
        are skipped.
        """
        prepared = self._prepare(event)
        if prepared is None:
            return
        event, handlers = prepared

        for handler_entry in handlers:
            if asyncio.iscoroutinefunction(handler_entry.handler):
                self._schedule(handler_entry, event)
                continue
            try:
                handler_entry.handler(event)
            except Exception as e:
                self._log_handler_failure(handler_entry, event, e)

    def _schedule(self, handler_entry: EventHandler, event: Event) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            log.debug(
                "No running loop, async handler skipped",
                event_type=event.type.name,
                handler=handler_entry.handler.__name__
            )
            return

        async def run():
            try:
                await handler_entry.handler(event)
            except Exception as e:
                self._log_handler_failure(handler_entry, event, e)

        task = loop.create_task(run())
        self._pending_tasks.add(task)
        task.add_done_callback(self._pending_tasks.discard)

    @staticmethod
    def _log_handler_failure(handler_entry: EventHandler, event: Event, error: Exception) -> None:
        log.error(
            f"Event handler failed: {getattr(handler_entry.handler, '__name__', handler_entry.handler)} for {event.type.name}",
            exception=error
        )

    def get_event_history(self, limit: int = 10) -> List[Event]:
        """
        Get recent events from history

        Returns:
            List of recent events (newest last)
        """
        return self._event_history[-limit:]

    def clear_history(self) -> None:
        """Clear event history"""
        self._event_history.clear()
