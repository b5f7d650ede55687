import re

STRENGTH_LABELS = {
    0: "Very weak",
    1: "Very weak",
    2: "Weak",
    3: "Medium",
    4: "Strong",
    5: "Very strong",
}


def password_strength(password: str) -> int:
    """Score 0-5: two length thresholds plus uppercase, digit and symbol."""
    score = 0
    if len(password) >= 6:
        score += 1
    if len(password) >= 8:
        score += 1
    if re.search(r"[A-Z]", password):
        score += 1
    if re.search(r"[0-9]", password):
        score += 1
    if re.search(r"[^A-Za-z0-9]", password):
        score += 1
    return score


def strength_label(score: int) -> str:
    return STRENGTH_LABELS.get(score, "")
