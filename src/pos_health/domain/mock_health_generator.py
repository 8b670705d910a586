# rotasmart/src/pos_health/domain/mock_health_generator.py

import math
from typing import List

from pos_health.entities.device_health_entity import DeviceHealthRecord, PaperStatus


MODELOS = ["Point Smart 2", "Point Mini"]
BOBINAS = [PaperStatus.OK, PaperStatus.OK, PaperStatus.OK, PaperStatus.LOW, PaperStatus.EMPTY]
MOCK_LAST_UPDATE = "2023-10-25"


def _seeded_random(seed: str):
    """
    Pseudo-aleatório por seno: frac(sin(len(seed) + offset) * 10000).
    Mesma string → mesma sequência, sempre.
    """
    base = len(seed)

    def random(offset: int) -> float:
        x = math.sin(base + offset) * 10000
        return x - math.floor(x)

    return random


def generate_mock_health_data(seed: str) -> List[DeviceHealthRecord]:
    """Gera de 1 a 3 maquininhas fictícias para o modo demonstração."""
    seed = seed or ""
    random = _seeded_random(seed)

    n_maquinas = math.floor(random(0) * 3) + 1
    maquinas = []

    for i in range(n_maquinas):
        offset = i * 10
        sinal = math.floor(random(1 + offset) * 100)
        bateria = math.floor(random(2 + offset) * 100)
        erros = math.floor(random(3 + offset) * 10)

        maquinas.append(
            DeviceHealthRecord(
                machine_id=f"MOCK-{math.floor(random(99) * 1000)}",
                model=MODELOS[math.floor(random(5 + offset) * len(MODELOS))],
                signal_strength=sinal,
                battery_level=bateria,
                error_rate=erros,
                paper_status=BOBINAS[math.floor(random(7 + offset) * len(BOBINAS))],
                firmware_version=(
                    f"v{math.floor(random(8 + offset) * 5)}.{math.floor(random(9 + offset) * 9)}"
                ),
                incidents=1 if erros > 5 else 0,
                avg_uptime=math.floor(random(10 + offset) * 72) + 1,
                last_update=MOCK_LAST_UPDATE,
                connectivity="Wifi",
                last_transaction=f"{math.floor(random(6 + offset) * 12)}h ago",
            )
        )

    return maquinas
