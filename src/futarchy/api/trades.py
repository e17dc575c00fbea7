from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from futarchy.api.deps import get_trade_service
from futarchy.domain.models.trade import FormattedTrades, TradeSummary
from futarchy.exceptions import ExternalServiceError
from futarchy.trades.service import TradeHistoryService

router = APIRouter(prefix="/api/trades", tags=["trades"])

ServiceDep = Annotated[TradeHistoryService, Depends(get_trade_service)]


@router.get("", response_model=FormattedTrades)
async def list_trades(
    service: ServiceDep,
    user_address: str | None = Query(None, description="Trader address (case-insensitive)"),
    proposal_id: str | None = Query(None, description="Proposal / market address"),
    limit: int = Query(100, ge=1, le=1000),
) -> FormattedTrades:
    try:
        return await service.formatted_trades(user_address=user_address, proposal_id=proposal_id, limit=limit)
    except ExternalServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/summary", response_model=TradeSummary)
async def trade_summary(
    service: ServiceDep,
    user_address: str | None = Query(None),
    proposal_id: str | None = Query(None),
    limit: int = Query(100, ge=1, le=1000),
) -> TradeSummary:
    try:
        return await service.summary(user_address=user_address, proposal_id=proposal_id, limit=limit)
    except ExternalServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
