# Import models so that SQLAlchemy metadata includes them
from .student import Student  # noqa: F401
from .bill import Bill  # noqa: F401
from .payment import Payment  # noqa: F401
