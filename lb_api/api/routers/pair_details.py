from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from lb_api.api.deps import get_pair_details_use_case
from lb_api.api.schemas.bin_distribution import MAX_NUM_BINS
from lb_api.api.schemas.pair_details import BinReservesResponse, PairDetailsResponse
from lb_api.application.dto.pair_details import GetPairDetailsInput
from lb_api.application.use_cases.get_pair_details import GetPairDetailsUseCase
from lb_api.domain.exceptions import (
    InvalidBinCountError,
    InvalidPairAddressError,
    PairNotFoundError,
    PairStateLookupError,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/v1/pairs/{pair_address}", response_model=PairDetailsResponse)
def get_pair_details(
    pair_address: str,
    num_bins: int | None = Query(
        None,
        ge=1,
        le=MAX_NUM_BINS,
        description="Janela de bins em volta do ativo (default LB_PAIR_BINS_WINDOW).",
    ),
    use_case: GetPairDetailsUseCase = Depends(get_pair_details_use_case),
):
    try:
        result = use_case.execute(GetPairDetailsInput(pair_address=pair_address, num_bins=num_bins))
    except PairNotFoundError as exc:
        logger.warning("pair_details_router: pair_not_found pair=%s", pair_address)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PairStateLookupError as exc:
        logger.warning("pair_details_router: pair_state_unavailable pair=%s detail=%s", pair_address, exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except (InvalidPairAddressError, InvalidBinCountError) as exc:
        logger.warning("pair_details_router: invalid_input pair=%s detail=%s", pair_address, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return PairDetailsResponse(
        pair_address=result.pair_address,
        reserve_x=str(result.reserve_x),
        reserve_y=str(result.reserve_y),
        active_id=result.active_id,
        bin_step=result.bin_step,
        bins=[
            BinReservesResponse(
                bin_id=item.bin_id,
                reserve_x=str(item.reserve_x),
                reserve_y=str(item.reserve_y),
                is_active=item.is_active,
            )
            for item in result.bins
        ],
    )
