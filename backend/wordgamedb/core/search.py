import re

# . * + ? ^ $ { } ( ) | [ ] \
_REGEX_SPECIALS = re.compile(r"[.*+?^${}()|\[\]\\]")


def escape_regex(value: str) -> str:
    """Backslash-escape every regex metacharacter in ``value``."""
    return _REGEX_SPECIALS.sub(lambda m: "\\" + m.group(0), value)


def build_search_pattern(query: str) -> str:
    """Case-insensitive partial-match pattern for the REGEXP operator."""
    return "(?i)" + escape_regex(query.lower())
