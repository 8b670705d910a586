# tests/pos_health/test_health_join_service.py

import pytest

from common.errors import InvalidInputError
from common.establishment_entity import EstablishmentRecord
from pos_health.application.health_enrichment_use_case import HealthEnrichmentUseCase
from pos_health.domain.health_join_service import (
    group_by_establishment,
    match_health_data,
    merge_route_and_health_data,
)
from pos_health.domain.mock_health_generator import generate_mock_health_data
from pos_health.entities.device_health_entity import DeviceHealthRecord


def _device(machine_id, erros=0, sinal=80):
    return DeviceHealthRecord(
        machine_id=machine_id,
        model="Point Mini",
        signal_strength=sinal,
        battery_level=50,
        error_rate=erros,
        paper_status="OK",
        firmware_version="v2.1",
    )


@pytest.fixture
def tabela():
    return {
        "padaria do joão": [_device("P1"), _device("P2")],
        "mercado central": [_device("M1", erros=8)],
    }


def test_casamento_exato(tabela):
    devices = match_health_data("  Padaria do João ", tabela)
    assert [d.machine_id for d in devices] == ["P1", "P2"]


def test_casamento_por_contencao(tabela):
    assert [d.machine_id for d in match_health_data("Mercado Central Ltda", tabela)] == ["M1"]
    assert [d.machine_id for d in match_health_data("Padaria", tabela)] == ["P1", "P2"]


def test_sem_casamento_e_desconhecido(tabela):
    assert match_health_data("Farmácia Popular", tabela) is None


def test_merge_anexa_sem_alterar_entrada(tabela):
    records = [
        EstablishmentRecord(id="1", name="Padaria do João"),
        EstablishmentRecord(id="2", name="Farmácia Popular"),
    ]

    saida = merge_route_and_health_data(records, tabela)

    assert len(saida[0].health_data) == 2
    assert saida[1].health_data is None
    assert records[0].health_data is None
    assert saida[0] is not records[0]


def test_tabela_vazia_ou_ausente_usa_mock():
    records = [EstablishmentRecord(id="1", name="Padaria do João")]
    esperado = [d.to_dict() for d in generate_mock_health_data("Padaria do João")]

    for tabela in (None, {}):
        saida = merge_route_and_health_data(records, tabela)
        assert [d.to_dict() for d in saida[0].health_data] == esperado


def test_prioridade_automatica_por_score(tabela):
    records = [
        EstablishmentRecord(id="1", name="Mercado Central"),
        EstablishmentRecord(id="2", name="Padaria do João"),
    ]

    saida = merge_route_and_health_data(records, tabela)

    assert saida[0].priority == "high"     # 0% operativas
    assert saida[1].priority == "normal"   # 100% operativas


def test_prioridade_vinda_do_arquivo_nao_e_recalculada(tabela):
    records = [EstablishmentRecord(id="1", name="Mercado Central", priority="lunch", priority_source="file")]

    saida = merge_route_and_health_data(records, tabela)

    assert saida[0].priority == "lunch"


def test_lista_ausente_e_erro():
    with pytest.raises(InvalidInputError):
        merge_route_and_health_data(None, {})


def test_agrupar_por_estabelecimento():
    tabela = group_by_establishment(
        [
            {"establishment": " Bar do Zé ", "machineId": "B1"},
            {"establishment": "bar do zé", "machineId": "B2"},
            {"establishment": "", "machineId": "X"},
        ]
    )

    assert list(tabela) == ["bar do zé"]
    assert [d.machine_id for d in tabela["bar do zé"]] == ["B1", "B2"]


def test_use_case_com_tabela_pronta_e_resumo(tabela):
    records = [
        EstablishmentRecord(id="1", name="Mercado Central"),
        EstablishmentRecord(id="2", name="Loja Nova"),
    ]

    enriquecidos = HealthEnrichmentUseCase(health_table=tabela).execute(records)
    resumo = HealthEnrichmentUseCase.resumo(enriquecidos)

    assert resumo[0] == {
        "id": "1",
        "name": "Mercado Central",
        "devices": 1,
        "score": 0,
        "statuses": {"CRITICAL": 1},
        "priority": "high",
    }
    assert resumo[1]["devices"] is None
    assert resumo[1]["score"] is None
