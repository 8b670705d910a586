# tests/establishment_segmentation/test_feature_extractor.py

import pytest

from common.establishment_entity import EstablishmentRecord
from establishment_segmentation.domain.feature_extractor import (
    extract_features,
    sales_value,
    time_to_decimal,
)


def _r(i, sales=None, abre=None, fecha=None):
    return EstablishmentRecord(id=str(i), name=f"Loja {i}", average_sales=sales, open_time=abre, close_time=fecha)


@pytest.mark.parametrize(
    "entrada, esperado",
    [
        ("08:30", 8.5),
        ("18:00", 18.0),
        ("7", 7.0),
        ("abc", 0.0),
        ("", 0.0),
        (None, 0.0),
    ],
)
def test_time_to_decimal(entrada, esperado):
    assert time_to_decimal(entrada) == pytest.approx(esperado)


def test_horarios_ausentes_usam_padrao_9_18():
    f = extract_features([_r(1, 100)])[0]

    assert f.open == 9.0
    assert f.close == 18.0
    assert f.duration == 9.0


def test_meia_noite_conta_como_ausente():
    f = extract_features([_r(1, 100, "00:00", "00:00")])[0]

    assert f.open == 9.0
    assert f.close == 18.0


def test_fechamento_apos_meia_noite_soma_24():
    f = extract_features([_r(1, 100, "22:00", "02:00")])[0]

    assert f.close == 26.0
    assert f.duration == 4.0
    assert f.n_close == pytest.approx(26 / 24)


def test_vendas_normalizadas_pelo_maximo_do_lote():
    fs = extract_features([_r(1, 50), _r(2, 200), _r(3, None)])

    assert [f.n_sales for f in fs] == pytest.approx([0.25, 1.0, 0.0])
    assert fs[0].n_open == pytest.approx(9 / 24)


def test_lote_sem_vendas_divide_por_um():
    fs = extract_features([_r(1, 0), _r(2, None)])

    assert [f.n_sales for f in fs] == [0.0, 0.0]


def test_sales_value_tolera_lixo():
    assert sales_value(_r(1, "1500.5")) == 1500.5
    assert sales_value(_r(1, "n/d")) == 0.0
    assert sales_value(_r(1, float("nan"))) == 0.0


def test_lote_vazio():
    assert extract_features([]) == []
