# rotasmart/src/common/establishment_entity.py

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from pos_health.entities.device_health_entity import DeviceHealthRecord


PRIORIDADES_VALIDAS = {"normal", "high", "medium", "lunch", "end_of_day"}

# Nome na planilha/JSON (camelCase) → atributo
_WIRE_FIELDS = {
    "id": "id",
    "name": "name",
    "averageSales": "average_sales",
    "sector": "sector",
    "bestDay": "best_day",
    "openTime": "open_time",
    "closeTime": "close_time",
    "address": "address",
    "neighborhood": "neighborhood",
    "municipality": "municipality",
    "priority": "priority",
    "prioritySource": "priority_source",
    "assignedTeamId": "assigned_team_id",
    "assignedMemberId": "assigned_member_id",
    "assignmentReason": "assignment_reason",
}


@dataclass
class EstablishmentRecord:
    """
    Estabelecimento a ser visitado (1 linha da planilha de rotas).
    Colunas extras da planilha ficam em `extra` e nunca são lidas pelos algoritmos.
    """

    # ============================================================
    # Identificação
    # ============================================================
    id: str
    name: str

    # ============================================================
    # Comercial
    # ============================================================
    average_sales: Optional[float] = None
    sector: Optional[str] = None
    best_day: Optional[str] = None

    # ============================================================
    # Horário ("HH:MM")
    # ============================================================
    open_time: Optional[str] = None
    close_time: Optional[str] = None

    # ============================================================
    # Localização
    # ============================================================
    address: Optional[str] = None
    neighborhood: Optional[str] = None
    municipality: Optional[str] = None

    # ============================================================
    # Prioridade e atribuição
    # ============================================================
    priority: str = "normal"
    priority_source: str = "auto"
    assigned_team_id: Optional[str] = None
    assigned_member_id: Optional[str] = None
    assignment_reason: Optional[str] = None

    # ============================================================
    # Telemetria (None = desconhecido, [] = nenhuma máquina)
    # ============================================================
    health_data: Optional[List["DeviceHealthRecord"]] = None

    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.id = str(self.id).strip()
        self.name = "" if self.name is None else str(self.name)

        if self.priority not in PRIORIDADES_VALIDAS:
            self.priority = "normal"

    # ------------------------------------------------------------
    @property
    def is_assigned(self) -> bool:
        return bool(self.assigned_team_id)

    # ------------------------------------------------------------
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EstablishmentRecord":
        """Constrói a partir do formato camelCase (API / planilha já parseada)."""
        from pos_health.entities.device_health_entity import DeviceHealthRecord

        kwargs: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}

        for chave, valor in data.items():
            if chave in _WIRE_FIELDS:
                kwargs[_WIRE_FIELDS[chave]] = valor
            elif chave in ("posData", "healthData"):
                continue
            else:
                extra[chave] = valor

        bruto = data.get("healthData", data.get("posData"))
        if bruto is not None:
            kwargs["health_data"] = [
                d if isinstance(d, DeviceHealthRecord) else DeviceHealthRecord.from_dict(d)
                for d in bruto
            ]

        kwargs.setdefault("id", "")
        kwargs.setdefault("name", "")
        return cls(extra=extra, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            wire: getattr(self, attr) for wire, attr in _WIRE_FIELDS.items()
        }
        if isinstance(out["averageSales"], float) and math.isnan(out["averageSales"]):
            out["averageSales"] = None
        out["healthData"] = (
            None if self.health_data is None else [d.to_dict() for d in self.health_data]
        )
        out.update(self.extra)
        return out
