from .words import Word, new_word_id


__all__ = [
    "Word",
    "new_word_id",
]
