from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal('0.01')


def to_money(value) -> Decimal:
    """Coerce a number to a Decimal rounded half-up to cents"""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def money_json(value):
    return None if value is None else float(to_money(value))
