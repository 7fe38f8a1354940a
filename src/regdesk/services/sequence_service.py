"""Named sequence generator backed by the counters table"""

import logging

from sqlalchemy import update
from sqlmodel import Session

from regdesk.models.counter import Counter

logger = logging.getLogger(__name__)

TICKET_SEQUENCE = "ticketNo"


class SequenceService:
    """Issues monotonically increasing integers per sequence name"""

    def __init__(self, db_session: Session, start: int = 0):
        self.db = db_session
        self.start = start

    def next_value(self, name: str = TICKET_SEQUENCE) -> int:
        """
        Increment and return the next value of a sequence.
        Note: This does NOT commit - caller must handle transaction

        Args:
            name: Sequence name

        Returns:
            The newly issued value; the first value issued is start + 1
        """
        stmt = (
            update(Counter)
            .where(Counter.name == name)
            .values(seq=Counter.seq + 1)
            .returning(Counter.seq)
            .execution_options(synchronize_session=False)
        )
        value = self.db.exec(stmt).scalar_one_or_none()

        if value is None:
            counter = Counter(name=name, seq=self.start + 1)
            self.db.add(counter)
            self.db.flush()
            value = counter.seq
            logger.info(f"Initialized sequence '{name}' at {value}")

        return value

    def current_value(self, name: str = TICKET_SEQUENCE) -> int:
        """Last issued value of a sequence, or the start value if none issued"""
        counter = self.db.get(Counter, name)
        return counter.seq if counter else self.start
