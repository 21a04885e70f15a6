"""Pydantic models for the in-memory conversation session."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt


class Turn(BaseModel):
    """One complete question, answer and review cycle."""

    model_config = ConfigDict(frozen=True)

    sequence_number: PositiveInt
    question: str
    answer: str
    review: str
    created_at: datetime = Field(default_factory=datetime.now)


class Session(BaseModel):
    """All turns recorded during one run of the tool."""

    started_at: datetime = Field(default_factory=datetime.now)
    turns: List[Turn] = Field(default_factory=list)

    @property
    def next_sequence_number(self) -> int:
        return len(self.turns) + 1

    @property
    def first_question(self) -> Optional[str]:
        return self.turns[0].question if self.turns else None

    def record_turn(
        self,
        question: str,
        answer: str,
        review: str,
        created_at: Optional[datetime] = None,
    ) -> Turn:
        """Append a finished turn and return it.

        Only called once both the answer and the review are available, so a
        session never holds a partial turn.
        """
        turn = Turn(
            sequence_number=self.next_sequence_number,
            question=question,
            answer=answer,
            review=review,
            created_at=created_at or datetime.now(),
        )
        self.turns.append(turn)
        return turn
