"""Collateral sufficiency analysis for a desired swap.

`analyze` is pure over a balance snapshot; `CollateralAnalyzer` reads the
snapshot through a BalanceProvider first.
"""

import asyncio
import logging
from decimal import Decimal, InvalidOperation
from typing import Mapping

from futarchy.domain.models.swap import InsufficientFundsAction, SplitCollateralAction, TokenAnalysis
from futarchy.swap.ports import BalanceProvider
from futarchy.tokens.registry import RegistryHolder, TokenRegistry

logger = logging.getLogger(__name__)

Balances = Mapping[str, Decimal | str]


def analyze(
    token_in: str,
    required_amount: Decimal | str,
    balances: Balances,
    registry: TokenRegistry,
) -> TokenAnalysis:
    try:
        required = _to_decimal(required_amount)
        lookup = {address.lower(): value for address, value in balances.items()}
        role = registry.classify(token_in)
        current = _to_decimal(lookup.get(token_in.lower(), "0"))
    except (InvalidOperation, ValueError) as e:
        return TokenAnalysis(sufficient=False, error=f"Invalid balance or amount: {e}")

    if role is None or not role.is_conditional:
        if current >= required:
            return TokenAnalysis(sufficient=True, token_role=role, current_balance=current, required_amount=required)
        shortage = required - current
        return TokenAnalysis(
            sufficient=False,
            token_role=role,
            current_balance=current,
            required_amount=required,
            shortage=shortage,
            actions=(
                InsufficientFundsAction(
                    shortage=shortage,
                    description=f"Insufficient balance. Need {_fmt(shortage)} more tokens.",
                ),
            ),
        )

    shortage = max(Decimal(0), required - current)
    if shortage == 0:
        return TokenAnalysis(sufficient=True, token_role=role, current_balance=current, required_amount=required)

    collateral = registry.collateral_for(role.category)
    if collateral is None:
        return TokenAnalysis(
            sufficient=False,
            token_role=role,
            current_balance=current,
            required_amount=required,
            shortage=shortage,
            error=f"No collateral token configured for {role.category.value}",
        )

    try:
        available = _to_decimal(lookup.get(collateral.address, "0"))
    except (InvalidOperation, ValueError) as e:
        return TokenAnalysis(
            sufficient=False, token_role=role, current_balance=current, required_amount=required,
            shortage=shortage, error=f"Invalid collateral balance: {e}",
        )

    collateral_symbol = collateral.symbol or "UNKNOWN"
    can_auto_split = available >= shortage
    if can_auto_split:
        action = SplitCollateralAction(
            collateral_category=role.category,
            amount=shortage,
            collateral_symbol=collateral_symbol,
            description=f"Split {_fmt(shortage)} {collateral_symbol} to get missing {role.symbol}",
        )
    else:
        action = InsufficientFundsAction(
            shortage=shortage,
            collateral_symbol=collateral_symbol,
            description=(
                f"Need {_fmt(shortage)} more {role.symbol}. "
                f"Consider acquiring more {collateral_symbol} first."
            ),
        )

    return TokenAnalysis(
        sufficient=False,
        token_role=role,
        current_balance=current,
        required_amount=required,
        shortage=shortage,
        can_auto_split=can_auto_split,
        collateral_available=available,
        collateral_symbol=collateral_symbol,
        actions=(action,),
    )


class CollateralAnalyzer:
    """Reads the balances `analyze` needs, then analyzes against the current registry."""

    def __init__(self, balance_provider: BalanceProvider, registry_holder: RegistryHolder) -> None:
        self._balances = balance_provider
        self._registry_holder = registry_holder

    async def analyze(self, token_in: str, required_amount: Decimal | str, user_address: str | None) -> TokenAnalysis:
        registry = self._registry_holder.current
        addresses = [token_in.lower()]
        role = registry.classify(token_in)
        if role is not None and role.is_conditional:
            collateral = registry.collateral_for(role.category)
            if collateral is not None:
                addresses.append(collateral.address)

        try:
            values = await asyncio.gather(*(self._balances.get_balance(a, user_address) for a in addresses))
        except Exception as e:
            logger.exception("Balance lookup failed for %s", token_in)
            return TokenAnalysis(sufficient=False, token_role=role, error=f"Balance lookup failed: {e}")

        return analyze(token_in, required_amount, dict(zip(addresses, values)), registry)


def _to_decimal(value: Decimal | str | int | None) -> Decimal:
    if value is None or value == "":
        return Decimal(0)
    amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    if not amount.is_finite():
        raise ValueError(f"not a finite amount: {value}")
    return amount


def _fmt(value: Decimal) -> str:
    return format(value.normalize(), "f")
