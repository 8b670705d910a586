# rotasmart/src/pos_health/domain/health_classifier.py

from typing import List, Optional

from common.math_utils import round_half_up
from pos_health.entities.device_health_entity import (
    DeviceHealthRecord,
    HealthStatus,
    PaperStatus,
)


ERRO_CRITICO = 6
SINAL_FRACO = 20
SINAL_BOM = 40


def classify_device(device: DeviceHealthRecord) -> HealthStatus:
    """Crítico → Comprometido → Operativo → Atenção (nesta ordem)."""
    if device.error_rate >= ERRO_CRITICO:
        return HealthStatus.CRITICAL
    if device.paper_status != PaperStatus.OK or device.signal_strength < SINAL_FRACO:
        return HealthStatus.COMPROMISED
    if device.error_rate < ERRO_CRITICO and device.signal_strength > SINAL_BOM:
        return HealthStatus.OPERATIVE
    return HealthStatus.ATTENTION


def health_score(devices: Optional[List[DeviceHealthRecord]]) -> Optional[int]:
    """% de máquinas operativas (0–100); None sem máquinas."""
    if not devices:
        return None

    operativas = sum(1 for d in devices if classify_device(d) == HealthStatus.OPERATIVE)
    return round_half_up(operativas / len(devices) * 100)


def priority_from_score(score: int, atual: str = "normal") -> str:
    # ≤25 alta, ≤50 média, acima disso mantém
    if score <= 25:
        return "high"
    if score <= 50:
        return "medium"
    return atual
