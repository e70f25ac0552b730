# Aeolus Map: reconcile air quality readings onto an interactive map
# Copyright (C) 2025 Ruaraidh Dobson, South London Scientific

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Synchronous publish/subscribe for map recomputation triggers.

Every state change that can affect the drawn markers is published as a
topic. Handlers run synchronously, in subscription order, on the thread
that publishes - there is no queue and no background dispatch.

Example:
    >>> bus = EventBus()
    >>> bus.subscribe(LAYER_CHANGED, lambda **event: print(event["layer"]))
    >>> bus.publish(LAYER_CHANGED, layer="COMPARISON")
    COMPARISON
"""

import logging

from .types import EventHandler

logger = logging.getLogger(__name__)

# Topics that trigger a full marker recomputation
MAP_READY = "map_ready"
READING_UPDATED = "reading_updated"
LAYER_CHANGED = "layer_changed"
VISIBILITY_CHANGED = "visibility_changed"

# Topic for the user-visible error indicator
FETCH_FAILED = "fetch_failed"

RECOMPUTE_TOPICS = (MAP_READY, READING_UPDATED, LAYER_CHANGED, VISIBILITY_CHANGED)
TOPICS = RECOMPUTE_TOPICS + (FETCH_FAILED,)


class EventBus:
    """
    A dictionary of topic -> handlers.

    Unknown topics are rejected on both subscribe and publish so that a
    typo cannot silently disconnect a handler.
    """

    def __init__(self):
        self._handlers: dict[str, list[EventHandler]] = {topic: [] for topic in TOPICS}

    def _check_topic(self, topic: str) -> None:
        if topic not in self._handlers:
            available = ", ".join(TOPICS)
            raise ValueError(f"Unknown topic '{topic}'. Available topics: {available}")

    def subscribe(self, topic: str, handler: EventHandler) -> None:
        """
        Register a handler for a topic.

        Args:
            topic: One of the module-level topic constants
            handler: Callable receiving the event payload as keyword arguments

        Raises:
            ValueError: If the topic is unknown
        """
        self._check_topic(topic)
        self._handlers[topic].append(handler)

    def unsubscribe(self, topic: str, handler: EventHandler) -> bool:
        """
        Remove a handler from a topic.

        Returns:
            bool: True if the handler was removed, False if it wasn't subscribed
        """
        self._check_topic(topic)
        try:
            self._handlers[topic].remove(handler)
        except ValueError:
            return False
        return True

    def publish(self, topic: str, **payload) -> None:
        """
        Deliver an event to every handler subscribed to its topic.

        Handler exceptions propagate to the publisher.

        Args:
            topic: One of the module-level topic constants
            **payload: Event data passed to each handler
        """
        self._check_topic(topic)
        handlers = list(self._handlers[topic])
        logger.debug(f"Publishing {topic} to {len(handlers)} handler(s)")
        for handler in handlers:
            handler(**payload)

    def subscriber_count(self, topic: str) -> int:
        """Number of handlers subscribed to a topic."""
        self._check_topic(topic)
        return len(self._handlers[topic])
