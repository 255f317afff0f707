from __future__ import annotations

from lb_api.domain.entities.liquidity_parameters import ResolvedTokenOrder, TokenAmount
from lb_api.domain.exceptions import TokenOrderError


def normalize_address(address: str, *, field_name: str = "address") -> str:
    value = (address or "").strip().lower()
    if not value.startswith("0x") or len(value) != 42:
        raise TokenOrderError(f"{field_name} must be a 0x-prefixed 20-byte address.")
    try:
        int(value[2:], 16)
    except ValueError as exc:
        raise TokenOrderError(f"{field_name} must be hexadecimal.") from exc
    return value


def resolve_token_order(
    token_a: TokenAmount,
    token_b: TokenAmount,
    *,
    contract_token_x: str | None = None,
    contract_token_y: str | None = None,
) -> ResolvedTokenOrder:
    """Coloca os tokens informados pelo usuario na ordem tokenX/tokenY do par.

    Quando o contrato informa tokenX/tokenY essa ordem prevalece; senao, o
    menor endereco vira tokenX.
    """
    address_a = normalize_address(token_a.address, field_name="token_a.address")
    address_b = normalize_address(token_b.address, field_name="token_b.address")
    if address_a == address_b:
        raise TokenOrderError("token_a and token_b must be different tokens.")

    if contract_token_x and contract_token_y:
        pair_x = normalize_address(contract_token_x, field_name="token_x")
        pair_y = normalize_address(contract_token_y, field_name="token_y")
        if {address_a, address_b} != {pair_x, pair_y}:
            raise TokenOrderError("Tokens do not match the pair tokenX/tokenY.")
        swapped = address_a != pair_x
    else:
        swapped = address_a > address_b

    if swapped:
        return ResolvedTokenOrder(token_x=token_b, token_y=token_a, swapped=True)
    return ResolvedTokenOrder(token_x=token_a, token_y=token_b, swapped=False)
