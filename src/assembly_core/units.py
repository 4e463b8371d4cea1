import math

CM = float
KG = float


def parse_float(value) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValueError("empty input")
    text = text.replace(",", ".")
    return float(text)


def parse_units(value) -> int:
    """Order quantities; blanks and garbage count as zero units, fractions round up."""
    try:
        number = parse_float(value)
    except ValueError:
        return 0
    if not math.isfinite(number) or number <= 0:
        return 0
    return int(math.ceil(number))


def format_float(value: float, ndigits: int = 1) -> str:
    return f"{value:.{ndigits}f}"
