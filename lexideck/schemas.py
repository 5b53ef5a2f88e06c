# lexideck/schemas.py
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from lexideck.config import QUIZ_OPTION_COUNT
from lexideck.models import SessionType

# --- IMPORT DTOs ---

class FlashcardImportDTO(BaseModel):
    word: str = Field(min_length=1)
    meaning: str = Field(min_length=1)
    example: Optional[str] = None

class DeckImportDTO(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = ""
    is_public: bool = False
    cards: List[FlashcardImportDTO]

    @field_validator('cards')
    def validate_card_count(cls, v):
        if not v:
            raise ValueError("Deck must contain at least one card.")
        if len(v) > 500:
            raise ValueError("Max 500 cards per import allowed.")
        return v

# --- LEARNING ENGINE RECORDS ---
# All frozen: transitions hand out new snapshots via model_copy().

class FlashcardSnapshot(BaseModel):
    """Read-only copy of a flashcard, taken when the session loads."""
    model_config = ConfigDict(frozen=True)

    id: int
    deck_id: int
    word: str
    meaning: str
    example: Optional[str] = None


class SessionOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: SessionType
    total: int
    correct: int

    @property
    def percentage(self) -> int:
        if self.total <= 0:
            return 0
        return round(self.correct / self.total * 100)


class StudyItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    flashcard: FlashcardSnapshot
    known: Optional[bool] = None  # None until classified


class StudyState(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: SessionType = SessionType.FLASHCARD
    items: Tuple[StudyItem, ...]
    current_index: int = 0
    revealed: bool = False
    known_count: int = 0
    completed: bool = False

    @property
    def current_item(self) -> Optional[StudyItem]:
        if self.current_index >= len(self.items):
            return None
        return self.items[self.current_index]

    def outcome(self) -> SessionOutcome:
        if not self.completed:
            raise ValueError("Study session is still in progress.")
        return SessionOutcome(mode=self.mode, total=len(self.items), correct=self.known_count)


class QuizQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    flashcard: FlashcardSnapshot
    options: Tuple[str, ...]
    correct_answer: str

    @model_validator(mode='after')
    def validate_options(self):
        if len(self.options) != QUIZ_OPTION_COUNT:
            raise ValueError(f"A question needs exactly {QUIZ_OPTION_COUNT} options.")
        if self.options.count(self.correct_answer) != 1:
            raise ValueError("The correct answer must appear exactly once among the options.")
        return self


class QuizState(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: SessionType = SessionType.QUIZ
    questions: Tuple[QuizQuestion, ...]
    current_index: int = 0
    selected_answer: Optional[str] = None
    show_result: bool = False
    correct_count: int = 0
    completed: bool = False

    @property
    def current_question(self) -> Optional[QuizQuestion]:
        if self.current_index >= len(self.questions):
            return None
        return self.questions[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return self.current_index >= len(self.questions) - 1

    def outcome(self) -> SessionOutcome:
        if not self.completed:
            raise ValueError("Quiz is still in progress.")
        return SessionOutcome(mode=self.mode, total=len(self.questions), correct=self.correct_count)


class PairKind(str, Enum):
    WORD = "word"
    MEANING = "meaning"


class MatchPair(BaseModel):
    """One tile on the match board."""
    model_config = ConfigDict(frozen=True)

    id: str
    kind: PairKind
    content: str
    flashcard_id: int
    matched: bool = False


class PendingCheck(BaseModel):
    """A word/meaning comparison waiting out its feedback delay."""
    model_config = ConfigDict(frozen=True)

    attempt: int
    word_pair_id: str
    meaning_pair_id: str
    is_match: bool
    delay: float


class MatchState(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: SessionType = SessionType.MATCH
    pairs: Tuple[MatchPair, ...]
    total: int
    selected_word_id: Optional[str] = None
    selected_meaning_id: Optional[str] = None
    matched_count: int = 0
    attempts: int = 0
    pending: Optional[PendingCheck] = None
    completed: bool = False

    @property
    def word_pairs(self) -> List[MatchPair]:
        return [p for p in self.pairs if p.kind == PairKind.WORD]

    @property
    def meaning_pairs(self) -> List[MatchPair]:
        return [p for p in self.pairs if p.kind == PairKind.MEANING]

    def get_pair(self, pair_id: str) -> Optional[MatchPair]:
        for pair in self.pairs:
            if pair.id == pair_id:
                return pair
        return None

    def outcome(self) -> SessionOutcome:
        if not self.completed:
            raise ValueError("Match game is still in progress.")
        # Every card ends up matched, only the number of attempts varies
        return SessionOutcome(mode=self.mode, total=self.total, correct=self.matched_count)


class SessionSummary(BaseModel):
    """The only artifact of a session that reaches the database."""
    model_config = ConfigDict(frozen=True)

    user_id: Optional[int] = None
    deck_id: int
    session_type: SessionType
    score: int = Field(ge=0)
    total_cards: int = Field(ge=0)

    @model_validator(mode='after')
    def validate_score(self):
        if self.score > self.total_cards:
            raise ValueError("Score cannot exceed the number of cards.")
        return self
