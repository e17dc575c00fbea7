from enum import Enum


class TokenCategory(str, Enum):
    """Collateral leg a token belongs to. Company and currency trade against each other; base is the neutral leg."""

    COMPANY = "company"
    CURRENCY = "currency"
    BASE = "base"


class TokenSide(str, Enum):
    YES = "yes"
    NO = "no"
    NONE = "none"
