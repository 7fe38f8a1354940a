"""SQLModel Counter model for named sequences"""

from sqlmodel import Field, SQLModel


class Counter(SQLModel, table=True):
    """Named monotonically increasing sequence (e.g. ticket numbers)"""

    __tablename__ = "counters"

    name: str = Field(primary_key=True)
    seq: int = Field(default=0)
