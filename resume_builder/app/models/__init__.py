from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Registers the ORM models on Base.metadata.
from .resume_model import Resume  # noqa: E402,F401
from .user import User  # noqa: E402,F401
