"""Symbol-based fallbacks used when a token has no registry role."""

import re

from futarchy.domain.enums import OutcomeSide

CONDITIONAL_SYMBOL = re.compile(r"^(YES|NO)[_\s-]")
YES_SYMBOL = re.compile(r"^YES$|YES[_\s-]")
NO_SYMBOL = re.compile(r"^NO$|NO[_\s-]")

# Known-incomplete stopgap; metadata-driven roles take precedence.
KNOWN_COMPANY_SYMBOLS: tuple[str, ...] = ("TSLAon", "GNO", "PNK")


def is_conditional_symbol(symbol: str | None) -> bool:
    return bool(CONDITIONAL_SYMBOL.search((symbol or "").upper()))


def is_base_symbol(symbol: str | None) -> bool:
    """Non-conditional stablecoin-like symbol (contains USD)."""
    return not is_conditional_symbol(symbol) and "USD" in (symbol or "").upper()


def looks_like_company(symbol: str | None) -> bool:
    return any(known in (symbol or "") for known in KNOWN_COMPANY_SYMBOLS)


def outcome_from_symbol(symbol: str | None) -> OutcomeSide | None:
    if not symbol:
        return None
    upper = symbol.upper()
    if YES_SYMBOL.search(upper):
        return OutcomeSide.YES
    if NO_SYMBOL.search(upper):
        return OutcomeSide.NO
    return None


def short_address(address: str | None) -> str:
    """Display fallback for a token we have no symbol for."""
    if not address:
        return "UNKNOWN"
    return address[:8] + "..."
