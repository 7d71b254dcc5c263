# /app/db/base_class.py

from sqlalchemy.orm import declarative_base

# All ORM models inherit from this Base.
Base = declarative_base()
