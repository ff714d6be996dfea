import re

from gitlore.schemas import round_half_up

IMPORT_LINE = re.compile(r"^import\s+", re.MULTILINE)


def calculate_complexity_score(code_snippet: str) -> int:
    """
    Heuristic 0-100 complexity score, independent of the model.

    Up to 60 points come from length (saturating at 1000 characters) and up
    to 40 from the number of lines starting with an import statement.
    """
    length_score = min(60.0, len(code_snippet) / 1000 * 60)
    import_score = min(40, len(IMPORT_LINE.findall(code_snippet)) * 8)

    return min(100, round_half_up(length_score + import_score))
