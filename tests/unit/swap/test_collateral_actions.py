from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from factories import GNO, MARKET, SDAI
from futarchy.domain.enums import TokenCategory
from futarchy.domain.models.swap import InsufficientFundsAction, SplitCollateralAction, TxReceipt
from futarchy.exceptions import ActionError
from futarchy.swap.actions import CollateralActionHandler
from futarchy.tokens.registry import RegistryHolder


@pytest.fixture()
def executor():
    executor = AsyncMock()
    executor.split.return_value = TxReceipt(tx_hash="0xsplit")
    executor.merge.return_value = TxReceipt(tx_hash="0xmerge")
    return executor


@pytest.fixture()
def handler(executor, registry_holder):
    return CollateralActionHandler(executor, registry_holder)


class TestExecute:
    async def test_split(self, handler, executor):
        action = SplitCollateralAction(collateral_category=TokenCategory.CURRENCY, amount=Decimal("10"))

        receipt = await handler.execute(action)

        assert receipt.tx_hash == "0xsplit"
        executor.split.assert_awaited_once_with(TokenCategory.CURRENCY, Decimal("10"), MARKET, SDAI)

    async def test_company_split_uses_company_base(self, handler, executor):
        await handler.execute(SplitCollateralAction(collateral_category=TokenCategory.COMPANY, amount=Decimal("1")))
        assert executor.split.await_args.args[3] == GNO

    async def test_not_executable(self, handler, executor):
        action = SplitCollateralAction(
            collateral_category=TokenCategory.CURRENCY, amount=Decimal("1"), executable=False,
        )
        with pytest.raises(ActionError, match="not executable"):
            await handler.execute(action)
        executor.split.assert_not_awaited()

    async def test_unknown_action_type(self, handler):
        with pytest.raises(ActionError, match="Unknown action type: INSUFFICIENT_FUNDS"):
            await handler.execute(InsufficientFundsAction(shortage=Decimal("1")))

    async def test_failed_receipt(self, handler, executor):
        executor.split.return_value = TxReceipt(tx_hash="0xbad", success=False)
        with pytest.raises(ActionError, match="Collateral splitting transaction failed"):
            await handler.split(TokenCategory.CURRENCY, Decimal("1"))

    async def test_no_metadata(self, executor):
        handler = CollateralActionHandler(executor, RegistryHolder())
        with pytest.raises(ActionError, match="No collateral token"):
            await handler.split(TokenCategory.CURRENCY, Decimal("1"))


class TestMerge:
    async def test_merge(self, handler, executor):
        receipt = await handler.merge(TokenCategory.COMPANY, Decimal("2"))
        assert receipt.tx_hash == "0xmerge"
        executor.merge.assert_awaited_once_with(TokenCategory.COMPANY, Decimal("2"), MARKET, GNO)
