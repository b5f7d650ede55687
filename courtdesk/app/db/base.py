from courtdesk.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from courtdesk.app.models.user import User  # noqa: F401
from courtdesk.app.models.user_preferences import UserPreferences  # noqa: F401
from courtdesk.app.models.student import Student  # noqa: F401
from courtdesk.app.models.invoice import Invoice  # noqa: F401
from courtdesk.app.models.tennis_class import ClassStudent, TennisClass  # noqa: F401
from courtdesk.app.models.private_lesson import PrivateLesson  # noqa: F401
from courtdesk.app.models.material import Material  # noqa: F401
from courtdesk.app.models.note import Note  # noqa: F401
