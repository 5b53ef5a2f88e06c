# core/exceptions.py


class LearningSessionError(Exception):
    """Base class for failures that stop a learning session from starting or saving."""
    pass


class EmptyDeckError(LearningSessionError):
    """The deck has no flashcards, so a study session cannot start."""

    def __init__(self, message: str = "This deck has no flashcards to study."):
        super().__init__(message)


class InsufficientCardsError(LearningSessionError):
    """Quiz and Match need a minimum number of cards to build choices."""

    def __init__(self, required: int, available: int, message: str = None):
        self.required = required
        self.available = available
        super().__init__(
            message or f"At least {required} flashcards are required, found {available}."
        )


class LoadFailureError(LearningSessionError):
    """The flashcard store could not deliver the deck."""
    pass


class PersistenceFailureError(LearningSessionError):
    """A session summary could not be saved. Never fatal to the session."""
    pass
