from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from lb_api.api.deps import get_build_liquidity_parameters_use_case
from lb_api.api.schemas.liquidity_parameters import (
    LiquidityParametersRequest,
    LiquidityParametersResponse,
)
from lb_api.application.dto.liquidity_parameters import (
    BuildLiquidityParametersInput,
    TokenAmountInput,
)
from lb_api.application.use_cases.build_liquidity_parameters import BuildLiquidityParametersUseCase
from lb_api.domain.exceptions import (
    InvalidBinCountError,
    InvalidStrategyError,
    LiquidityParametersInputError,
    PairNotFoundError,
    PairStateLookupError,
    TokenOrderError,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/v1/liquidity-parameters", response_model=LiquidityParametersResponse)
def build_liquidity_parameters(
    req: LiquidityParametersRequest,
    use_case: BuildLiquidityParametersUseCase = Depends(get_build_liquidity_parameters_use_case),
):
    try:
        result = use_case.execute(
            BuildLiquidityParametersInput(
                token_a=TokenAmountInput(
                    address=req.token_a.address,
                    decimals=req.token_a.decimals,
                    amount=req.token_a.amount,
                ),
                token_b=TokenAmountInput(
                    address=req.token_b.address,
                    decimals=req.token_b.decimals,
                    amount=req.token_b.amount,
                ),
                strategy=req.strategy,
                num_bins=req.num_bins,
                bin_step=req.bin_step,
                pair_address=req.pair_address,
                active_id=req.active_id,
                id_slippage=req.id_slippage,
                slippage_bps=req.slippage_bps,
                recipient=req.recipient,
                refund_to=req.refund_to,
            )
        )
    except PairNotFoundError as exc:
        logger.warning(
            "liquidity_parameters_router: pair_not_found pair=%s detail=%s",
            req.pair_address,
            exc,
        )
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PairStateLookupError as exc:
        logger.warning(
            "liquidity_parameters_router: pair_state_unavailable pair=%s detail=%s",
            req.pair_address,
            exc,
        )
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except (
        InvalidBinCountError,
        InvalidStrategyError,
        LiquidityParametersInputError,
        TokenOrderError,
    ) as exc:
        logger.warning(
            "liquidity_parameters_router: invalid_input pair=%s strategy=%s detail=%s",
            req.pair_address,
            req.strategy,
            exc,
        )
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return LiquidityParametersResponse(
        pair_address=result.pair_address,
        swapped_pair=result.swapped_pair,
        strategy=result.strategy,
        token_x=result.token_x,
        token_y=result.token_y,
        bin_step=result.bin_step,
        amount_x=str(result.amount_x),
        amount_y=str(result.amount_y),
        amount_x_min=str(result.amount_x_min),
        amount_y_min=str(result.amount_y_min),
        active_id_desired=result.active_id_desired,
        id_slippage=result.id_slippage,
        delta_ids=result.delta_ids,
        distribution_x=[str(value) for value in result.distribution_x],
        distribution_y=[str(value) for value in result.distribution_y],
        to=result.to,
        refund_to=result.refund_to,
        deadline=result.deadline,
    )
