import logging

from sqlalchemy.orm import Session

from ..models import Word

logger = logging.getLogger(__name__)

SAMPLE_WORDS = [
    # word, category, letters, syllables, hint
    ("elephant", "animal", 8, 3, "Large mammal with a trunk"),
    ("giraffe", "animal", 7, 2, "Tallest animal on land"),
    ("banana", "fruit", 6, 3, "Long yellow fruit that monkeys love"),
    ("apple", "fruit", 5, 2, "Keeps the doctor away"),
    ("guitar", "instrument", 6, 2, "Six strings and a sound hole"),
    ("trumpet", "instrument", 7, 2, "Brass instrument with three valves"),
    ("volcano", "nature", 7, 3, "Mountain that can erupt"),
    ("keyboard", "technology", 8, 2, "You type on it"),
]


def seed_initial_data(db: Session) -> None:
    """Seed sample words if the table is empty."""
    if db.query(Word).count() > 0:
        return

    for word, category, num_letters, num_syllables, hint in SAMPLE_WORDS:
        db.add(
            Word(
                word=word,
                category=category,
                num_letters=num_letters,
                num_syllables=num_syllables,
                hint=hint,
            )
        )
    db.commit()
    logger.info("Seeded %d sample words", len(SAMPLE_WORDS))
