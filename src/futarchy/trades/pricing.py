"""Direction-aware trade pricing and buy/sell determination.

Prices are normalised so they are comparable across pool types:
- company/currency pools: currency per company token
- conditional/base pools: base per conditional token (reads as a 0-1 probability)
- anything else: amount_out / amount_in
"""

from dataclasses import dataclass
from decimal import Decimal

from futarchy.domain.enums import OperationSide, TokenCategory
from futarchy.domain.models.token import TokenRole
from futarchy.tokens.symbols import is_base_symbol, is_conditional_symbol, looks_like_company


@dataclass(frozen=True)
class TradeLeg:
    """One side of a trade from the user's perspective, amount in token units."""

    address: str | None
    symbol: str
    amount: Decimal
    role: TokenRole | None = None

    @property
    def category(self) -> TokenCategory | None:
        return self.role.category if self.role is not None else None


def operation_side(token_in: TradeLeg, token_out: TradeLeg) -> OperationSide:
    """Buy/sell from the user's perspective; first matching tier wins."""
    categories = (token_in.category, token_out.category)

    if TokenCategory.COMPANY in categories:
        # Receiving the company leg is a buy
        is_buy = token_in.category == TokenCategory.COMPANY
    elif TokenCategory.BASE in categories:
        # Receiving the conditional leg (giving base) is a buy
        is_buy = token_in.category != TokenCategory.BASE
    elif TokenCategory.CURRENCY in categories:
        is_buy = token_in.category != TokenCategory.CURRENCY
    else:
        is_buy = is_conditional_symbol(token_in.symbol)

    return OperationSide.BUY if is_buy else OperationSide.SELL


def calculate_price(token_in: TradeLeg, token_out: TradeLeg) -> Decimal:
    if token_in.role is not None and token_out.role is not None:
        in_conditional, out_conditional = token_in.role.is_conditional, token_out.role.is_conditional
        in_base, out_base = token_in.role.is_base, token_out.role.is_base
    else:
        in_conditional = is_conditional_symbol(token_in.symbol)
        out_conditional = is_conditional_symbol(token_out.symbol)
        in_base = is_base_symbol(token_in.symbol)
        out_base = is_base_symbol(token_out.symbol)

    if in_conditional and out_conditional:
        price = _company_currency_price(token_in, token_out)
        if price is not None:
            return price

    if in_conditional and out_base:
        # Buying: base given / conditional received
        return _ratio(token_out.amount, token_in.amount)
    if in_base and out_conditional:
        # Selling: base received / conditional given
        return _ratio(token_in.amount, token_out.amount)

    return _ratio(token_out.amount, token_in.amount)


def _company_currency_price(token_in: TradeLeg, token_out: TradeLeg) -> Decimal | None:
    """Currency per company, or None when neither leg can be identified as company."""
    in_company = token_in.category == TokenCategory.COMPANY
    out_company = token_out.category == TokenCategory.COMPANY
    if in_company != out_company:
        return _currency_per_company(token_in, token_out, in_company)

    in_company = looks_like_company(token_in.symbol)
    out_company = looks_like_company(token_out.symbol)
    if in_company != out_company:
        return _currency_per_company(token_in, token_out, in_company)

    return None


def _currency_per_company(token_in: TradeLeg, token_out: TradeLeg, in_is_company: bool) -> Decimal:
    if in_is_company:
        return _ratio(token_out.amount, token_in.amount)
    return _ratio(token_in.amount, token_out.amount)


def _ratio(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator == 0:
        return Decimal(0)
    return numerator / denominator
