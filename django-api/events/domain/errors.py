"""Domain errors for the events module."""

from common.errors import NotFoundError


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(entity="Event", entity_id=event_id)
        self.event_id = event_id
