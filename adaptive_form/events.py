"""Change notification for the adaptive_form engine.

This module provides the ChangeEvent record and the ChangeNotifier observer
list used by FormController. Renderers subscribe to a controller and are
told, synchronously and in subscription order, whenever a value or the
error state of the form changed.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from adaptive_form.errors import ReentrantMutationError
from adaptive_form.types import ChangeType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    """A single change notification.

    Attributes:
        type: Which controller operation caused the change
        field_id: ID of the changed field for VALUE_CHANGED, None otherwise

    Examples:
        >>> ChangeEvent(ChangeType.VALUE_CHANGED, field_id="email").field_id
        'email'
    """
    type: ChangeType
    field_id: Optional[str] = None

    def __post_init__(self):
        """Normalize string change types to ChangeType."""
        if isinstance(self.type, str) and not isinstance(self.type, ChangeType):
            object.__setattr__(self, "type", ChangeType(self.type))


ChangeListener = Callable[[ChangeEvent], None]
"""Type alias for change listener callbacks.

Listeners are called synchronously after the controller's state is
consistent. They may read the controller but must not mutate it.
"""


class ChangeNotifier:
    """Ordered list of change listeners.

    Features:
    - Synchronous dispatch in registration order
    - A listener registered twice is called twice
    - Error isolation: a failing listener is logged and the others still run,
      except for re-entrant mutation, which propagates to the caller once
      every listener has been called
    - Delivery flag so the owner can reject re-entrant mutation

    Examples:
        >>> notifier = ChangeNotifier()
        >>> seen = []
        >>> notifier.add_listener(lambda event: seen.append(event.type))
        >>> notifier.notify(ChangeEvent(ChangeType.CLEARED))
        >>> seen
        [<ChangeType.CLEARED: 'cleared'>]
    """

    def __init__(self):
        """Initialize notifier with an empty listener list."""
        self._listeners: List[ChangeListener] = []
        self._notifying = False

    @property
    def notifying(self) -> bool:
        """Whether a notification is currently being delivered."""
        return self._notifying

    @property
    def has_listeners(self) -> bool:
        return bool(self._listeners)

    def add_listener(self, listener: ChangeListener) -> None:
        """Subscribe a listener to all future notifications."""
        self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        """Unsubscribe one registration of a listener.

        Removing a listener that is not registered does nothing.
        """
        try:
            self._listeners.remove(listener)
        except ValueError:
            logger.debug("Ignoring removal of unregistered listener %r", listener)

    def notify(self, event: ChangeEvent) -> None:
        """Deliver an event to every listener registered when delivery starts.

        Listeners added or removed during delivery take effect from the
        next notification.

        Raises:
            ReentrantMutationError: The first one raised by a listener, after
                every listener has been called
        """
        self._notifying = True
        reentrant_error: Optional[ReentrantMutationError] = None
        try:
            for listener in list(self._listeners):
                try:
                    listener(event)
                except ReentrantMutationError as exc:
                    if reentrant_error is None:
                        reentrant_error = exc
                except Exception:
                    logger.exception(
                        "Change listener %r failed while handling %s", listener, event.type.value
                    )
            if reentrant_error is not None:
                raise reentrant_error
        finally:
            self._notifying = False

    def clear(self) -> None:
        """Remove all listeners."""
        self._listeners.clear()

    def listener_count(self) -> int:
        return len(self._listeners)


__all__ = [
    "ChangeEvent",
    "ChangeListener",
    "ChangeNotifier",
]
