from .attempt import QuizAttemptCreate
from .event import UserEventCreate
from .note import NoteCreate, Note

__all__ = ['QuizAttemptCreate', 'UserEventCreate', 'NoteCreate', 'Note']
