from __future__ import annotations


class DomainError(Exception):
    """Base para erros de dominio."""


class InvalidBinCountError(DomainError, ValueError):
    """Quantidade de bins deve ser um inteiro positivo."""


class InvalidStrategyError(DomainError, ValueError):
    """Estrategia de distribuicao desconhecida."""


class InvalidPrecisionError(DomainError, ValueError):
    """Precisao de ponto fixo invalida."""


class TokenOrderError(DomainError):
    """Nao foi possivel resolver a ordem tokenX/tokenY do par."""


class LiquidityParametersInputError(DomainError):
    """Parametros invalidos para montar o addLiquidity."""


class PairNotFoundError(DomainError):
    """Par LB solicitado nao existe."""


class PairStateLookupError(DomainError):
    """Nao foi possivel ler o estado do par via RPC."""


class InvalidPairAddressError(DomainError, ValueError):
    """Endereco de par mal formado."""
