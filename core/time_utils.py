from datetime import date


def today() -> date:
    """Local calendar date. Validators compare dates of birth against it."""
    return date.today()
