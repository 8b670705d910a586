# rotasmart/src/pos_health/domain/health_join_service.py

from dataclasses import replace
from typing import Dict, List, Mapping, Optional

from loguru import logger

from common.errors import InvalidInputError
from common.establishment_entity import EstablishmentRecord
from common.text_normalizer import normalize_health_key, textos_compativeis
from pos_health.domain.health_classifier import health_score, priority_from_score
from pos_health.domain.mock_health_generator import generate_mock_health_data
from pos_health.entities.device_health_entity import DeviceHealthRecord


HealthTable = Mapping[str, List[DeviceHealthRecord]]


def match_health_data(
    name: str, health_table: HealthTable
) -> Optional[List[DeviceHealthRecord]]:
    """
    1. chave exata (nome minúsculo, sem espaços nas pontas)
    2. contenção em qualquer direção, na ordem de inserção da tabela
    Sem casamento → None (desconhecido, diferente de lista vazia).
    """
    chave = normalize_health_key(name)

    if chave in health_table:
        return list(health_table[chave])

    for key, devices in health_table.items():
        if textos_compativeis(chave, key):
            return list(devices)

    return None


def _aplicar_prioridade_automatica(record: EstablishmentRecord) -> EstablishmentRecord:
    # prioridade vinda do arquivo nunca é recalculada
    if record.priority_source != "auto" or not record.health_data:
        return record

    score = health_score(record.health_data)
    nova = priority_from_score(score, record.priority)
    if nova != record.priority:
        logger.debug(f"🚦 {record.name}: score={score}% → prioridade {nova}")
        return replace(record, priority=nova)
    return record


def merge_route_and_health_data(
    records: List[EstablishmentRecord],
    health_table: Optional[HealthTable] = None,
) -> List[EstablishmentRecord]:
    """
    Anexa telemetria a cada estabelecimento.
    - Tabela presente e não vazia → casamento por nome
    - Tabela ausente/vazia → modo demonstração (mock determinístico)
    Não altera a lista de entrada; devolve novos registros.
    """
    if records is None:
        raise InvalidInputError("Lista de estabelecimentos ausente.")

    modo_real = bool(health_table)
    enriquecidos = []
    sem_match = 0

    for r in records:
        if modo_real:
            devices = match_health_data(r.name, health_table)
            if devices is None:
                sem_match += 1
        else:
            devices = generate_mock_health_data(r.name)

        enriquecidos.append(_aplicar_prioridade_automatica(replace(r, health_data=devices)))

    if modo_real:
        logger.info(
            f"🩺 Telemetria anexada | {len(records) - sem_match}/{len(records)} estabelecimentos casados"
        )
    else:
        logger.info(f"🧪 Base de saúde ausente — {len(records)} estabelecimentos com dados simulados")

    return enriquecidos


def group_by_establishment(rows: List[Dict]) -> Dict[str, List[DeviceHealthRecord]]:
    """Agrupa linhas {'establishment': ..., **device} pela chave normalizada."""
    tabela: Dict[str, List[DeviceHealthRecord]] = {}
    for row in rows:
        chave = normalize_health_key(row.get("establishment"))
        if not chave:
            continue
        device = row["device"] if isinstance(row.get("device"), DeviceHealthRecord) else DeviceHealthRecord.from_dict(row)
        tabela.setdefault(chave, []).append(device)
    return tabela
