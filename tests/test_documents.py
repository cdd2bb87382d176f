"""
Testes de validação de CPF/CNPJ
"""
import pytest
from app.utils.documents import (
    format_cpf_cnpj,
    is_valid_cnpj,
    is_valid_cpf,
    is_valid_cpf_cnpj,
    normalize_cpf_cnpj,
)


def test_normalize_removes_punctuation():
    assert normalize_cpf_cnpj("529.982.247-25") == "52998224725"
    assert normalize_cpf_cnpj("11.222.333/0001-81") == "11222333000181"
    assert normalize_cpf_cnpj("") == ""


@pytest.mark.parametrize("cpf", ["52998224725", "529.982.247-25", "39053344705"])
def test_valid_cpf(cpf):
    assert is_valid_cpf(cpf)
    assert is_valid_cpf_cnpj(cpf)


@pytest.mark.parametrize("cpf", ["52998224724", "11111111111", "5299822472"])
def test_invalid_cpf(cpf):
    assert not is_valid_cpf(cpf)


def test_valid_cnpj():
    assert is_valid_cnpj("11.222.333/0001-81")
    assert is_valid_cpf_cnpj("11222333000181")


@pytest.mark.parametrize("cnpj", ["11222333000182", "00000000000000"])
def test_invalid_cnpj(cnpj):
    assert not is_valid_cnpj(cnpj)


def test_wrong_length_is_invalid():
    assert not is_valid_cpf_cnpj("123456789012")


def test_format():
    assert format_cpf_cnpj("52998224725") == "529.982.247-25"
    assert format_cpf_cnpj("11222333000181") == "11.222.333/0001-81"
    assert format_cpf_cnpj("123") == "123"
