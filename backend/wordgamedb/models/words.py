import secrets
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from ..core.database import Base


def new_word_id() -> str:
    # 24 hex chars, same shape as the ids published in the API docs
    return secrets.token_hex(12)


class Word(Base):
    __tablename__ = "words"

    id = Column(String(24), primary_key=True, default=new_word_id)
    word = Column(String, unique=True, nullable=False, index=True)
    category = Column(String, nullable=False, index=True)

    num_letters = Column(Integer, nullable=False, index=True)
    num_syllables = Column(Integer, nullable=False, index=True)

    hint = Column(String, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)
