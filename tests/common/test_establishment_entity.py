# tests/common/test_establishment_entity.py

import json

from common.establishment_entity import EstablishmentRecord
from common.records_io import load_records
from pos_health.entities.device_health_entity import DeviceHealthRecord, PaperStatus


def test_from_dict_camelcase_e_colunas_extras():
    r = EstablishmentRecord.from_dict(
        {
            "id": " 42 ",
            "name": "Padaria Silva",
            "averageSales": 1500,
            "openTime": "07:00",
            "closeTime": "19:30",
            "neighborhood": "Pinheiros",
            "municipality": "São Paulo",
            "prioritySource": "file",
            "Observação": "cliente antigo",
        }
    )

    assert r.id == "42"
    assert r.average_sales == 1500
    assert r.open_time == "07:00"
    assert r.priority_source == "file"
    assert r.extra == {"Observação": "cliente antigo"}
    assert r.health_data is None
    assert not r.is_assigned


def test_prioridade_invalida_vira_normal():
    r = EstablishmentRecord(id="1", name="X", priority="urgentissima")
    assert r.priority == "normal"


def test_pos_data_legado_vira_health_data():
    r = EstablishmentRecord.from_dict(
        {
            "id": "1",
            "name": "Bar",
            "posData": [{"machineId": "M1", "paperStatus": "Vazio", "signalStrength": 80}],
        }
    )

    assert len(r.health_data) == 1
    assert isinstance(r.health_data[0], DeviceHealthRecord)
    assert r.health_data[0].paper_status == PaperStatus.EMPTY


def test_to_dict_preserva_extras_e_nomes_da_planilha():
    r = EstablishmentRecord(id="1", name="Bar", average_sales=float("nan"), extra={"CNPJ": "123"})
    d = r.to_dict()

    assert d["averageSales"] is None
    assert d["CNPJ"] == "123"
    assert d["healthData"] is None
    assert d["assignedTeamId"] is None


def test_load_records_csv_com_ponto_e_virgula(tmp_path):
    arquivo = tmp_path / "rotas.csv"
    arquivo.write_text(
        "id;name;averageSales;openTime;closeTime\n"
        "1;Padaria;100;08:00;18:00\n"
        ";Mercado;200;;\n",
        encoding="utf-8",
    )

    registros = load_records(str(arquivo))

    assert [r.name for r in registros] == ["Padaria", "Mercado"]
    assert registros[0].id == "1"
    assert registros[1].id  # uuid gerado
    assert registros[1].open_time is None


def test_load_records_json(tmp_path):
    arquivo = tmp_path / "rotas.json"
    arquivo.write_text(
        json.dumps([{"id": "a", "name": "Bar do Zé", "averageSales": 50}]),
        encoding="utf-8",
    )

    registros = load_records(str(arquivo))

    assert len(registros) == 1
    assert registros[0].average_sales == 50
