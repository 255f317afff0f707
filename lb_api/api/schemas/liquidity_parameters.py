from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from lb_api.api.schemas.bin_distribution import MAX_NUM_BINS


class TokenAmountRequest(BaseModel):
    address: str = Field(..., description="Endereco do token (0x...).")
    decimals: int = Field(18, ge=0, le=255, strict=True, description="Decimais do token.")
    amount: Decimal = Field(..., ge=0, description="Quantidade em unidades humanas.")


class LiquidityParametersRequest(BaseModel):
    token_a: TokenAmountRequest
    token_b: TokenAmountRequest
    strategy: str = Field("bell_curve", description="uniform, bell_curve ou u_shape.")
    num_bins: int | None = Field(
        None,
        le=MAX_NUM_BINS,
        strict=True,
        description="Default configurado em LB_DEFAULT_NUM_BINS.",
    )
    bin_step: int | None = Field(
        None,
        gt=0,
        strict=True,
        description="Obrigatorio quando pair_address nao e informado.",
    )
    pair_address: str | None = Field(
        None,
        description="Quando informado, tokenX/tokenY, activeId e binStep sao lidos do contrato.",
    )
    active_id: int | None = Field(
        None,
        ge=0,
        strict=True,
        description="Usado apenas sem pair_address; default 8388608 (2^23).",
    )
    id_slippage: int | None = Field(None, ge=0, strict=True)
    slippage_bps: int | None = Field(None, ge=0, le=10000, strict=True, description="500 = amountMin de 95%.")
    recipient: str = Field(..., description="Endereco que recebe os tokens LB.")
    refund_to: str | None = Field(None, description="Default: recipient.")


class LiquidityParametersResponse(BaseModel):
    pair_address: str | None
    swapped_pair: bool
    strategy: str
    token_x: str
    token_y: str
    bin_step: int
    amount_x: str
    amount_y: str
    amount_x_min: str
    amount_y_min: str
    active_id_desired: int
    id_slippage: int
    delta_ids: list[int]
    distribution_x: list[str]
    distribution_y: list[str]
    to: str
    refund_to: str
    deadline: int
