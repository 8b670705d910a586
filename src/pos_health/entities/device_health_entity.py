# rotasmart/src/pos_health/entities/device_health_entity.py

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any


class PaperStatus(str, Enum):
    OK = "OK"
    LOW = "Low"
    EMPTY = "Empty"

    @classmethod
    def parse(cls, valor) -> "PaperStatus":
        """Aceita o enum, o valor em inglês ou os termos da planilha (Pouco / Vazio / NOK)."""
        if isinstance(valor, PaperStatus):
            return valor

        texto = str(valor or "ok").strip().lower()
        if texto in ("low", "pouco"):
            return cls.LOW
        if texto in ("empty", "vazio"):
            return cls.EMPTY
        if "nok" in texto or "vazio" in texto or "acabando" in texto:
            return cls.EMPTY
        if "pouco" in texto:
            return cls.LOW
        return cls.OK


class HealthStatus(str, Enum):
    CRITICAL = "CRITICAL"
    COMPROMISED = "COMPROMISED"
    OPERATIVE = "OPERATIVE"
    ATTENTION = "ATTENTION"


@dataclass
class DeviceHealthRecord:
    """
    Telemetria de uma maquininha (POS).
    error_rate em escala 0–10, lido como percentual.
    """

    machine_id: str
    model: str
    signal_strength: float        # Sinal Wifi (%)
    battery_level: float          # Bateria (%)
    error_rate: float             # Taxa de erros
    paper_status: PaperStatus     # Bobina
    firmware_version: str
    incidents: int = 0            # Incidentes abertos
    avg_uptime: float = 0.0       # Tempo médio ligado (h)
    last_update: Optional[str] = None
    connectivity: str = "Wifi"
    last_transaction: str = "N/A"

    def __post_init__(self):
        self.paper_status = PaperStatus.parse(self.paper_status)

    # ------------------------------------------------------------
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeviceHealthRecord":
        return cls(
            machine_id=str(data.get("machineId", "")),
            model=data.get("model", "Point Smart 2"),
            signal_strength=data.get("signalStrength", 0) or 0,
            battery_level=data.get("batteryLevel", 0) or 0,
            error_rate=data.get("errorRate", 0) or 0,
            paper_status=data.get("paperStatus", "OK"),
            firmware_version=data.get("firmwareVersion", "v?.?"),
            incidents=data.get("incidents", 0) or 0,
            avg_uptime=data.get("avgUptime", 0) or 0,
            last_update=data.get("lastUpdate"),
            connectivity=data.get("connectivity", "Wifi"),
            last_transaction=data.get("lastTransaction", "N/A"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "machineId": self.machine_id,
            "model": self.model,
            "signalStrength": self.signal_strength,
            "batteryLevel": self.battery_level,
            "errorRate": self.error_rate,
            "paperStatus": self.paper_status.value,
            "firmwareVersion": self.firmware_version,
            "incidents": self.incidents,
            "avgUptime": self.avg_uptime,
            "lastUpdate": self.last_update,
            "connectivity": self.connectivity,
            "lastTransaction": self.last_transaction,
        }
