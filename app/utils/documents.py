"""
Utilitários para documentos brasileiros (CPF/CNPJ) e telefones
"""
import re

CPF_LENGTH = 11
CNPJ_LENGTH = 14

_CNPJ_WEIGHTS_1 = [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]
_CNPJ_WEIGHTS_2 = [6] + _CNPJ_WEIGHTS_1


def normalize_cpf_cnpj(value: str) -> str:
    """Remove pontuação: '529.982.247-25' -> '52998224725'."""
    if not value:
        return ""
    return re.sub(r'\D', '', value)


def _check_digit(digits: str, weights: list[int]) -> int:
    total = sum(int(d) * w for d, w in zip(digits, weights))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_cpf(value: str) -> bool:
    digits = normalize_cpf_cnpj(value)
    if len(digits) != CPF_LENGTH or digits == digits[0] * CPF_LENGTH:
        return False

    first = _check_digit(digits[:9], list(range(10, 1, -1)))
    second = _check_digit(digits[:10], list(range(11, 1, -1)))
    return digits[-2:] == f"{first}{second}"


def is_valid_cnpj(value: str) -> bool:
    digits = normalize_cpf_cnpj(value)
    if len(digits) != CNPJ_LENGTH or digits == digits[0] * CNPJ_LENGTH:
        return False

    first = _check_digit(digits[:12], _CNPJ_WEIGHTS_1)
    second = _check_digit(digits[:13], _CNPJ_WEIGHTS_2)
    return digits[-2:] == f"{first}{second}"


def is_valid_cpf_cnpj(value: str) -> bool:
    """
    Valida CPF (pessoa física) ou CNPJ (pessoa jurídica) pelos dígitos verificadores.
    """
    digits = normalize_cpf_cnpj(value)
    if len(digits) == CPF_LENGTH:
        return is_valid_cpf(digits)
    if len(digits) == CNPJ_LENGTH:
        return is_valid_cnpj(digits)
    return False


def format_cpf_cnpj(value: str) -> str:
    """Formata para exibição: 000.000.000-00 ou 00.000.000/0000-00."""
    digits = normalize_cpf_cnpj(value)
    if len(digits) == CPF_LENGTH:
        return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"
    if len(digits) == CNPJ_LENGTH:
        return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"
    return value
