# ==========================================================
# 📦 src/establishment_segmentation/entities/segmentation_entities.py
# ==========================================================

from dataclasses import dataclass, field
from typing import List, Dict, Any

from common.establishment_entity import EstablishmentRecord


@dataclass
class FeatureVector:
    """Vetor de features de um estabelecimento (efêmero, 1 por execução)."""
    sales: float
    open: float       # horas decimais
    close: float      # horas decimais (+24 se fecha após meia-noite)
    duration: float

    # 🔹 Normalizados [0, 1]
    n_sales: float = 0.0
    n_open: float = 0.0
    n_close: float = 0.0

    def as_point(self) -> List[float]:
        return [self.n_sales, self.n_open, self.n_close]


# ==========================================================
# 🏷️ Perfil de cluster (pós-rotulagem)
# ==========================================================
@dataclass
class ClusterProfile:
    cluster_id: int
    label: str
    description: str
    avg_sales: float
    avg_open: float
    avg_close: float
    duration: float
    members: List[EstablishmentRecord] = field(default_factory=list)
    color: str = "gray"
    icon: str = ""

    @property
    def size(self) -> int:
        return len(self.members)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "clusterId": self.cluster_id,
            "label": self.label,
            "description": self.description,
            "avgSales": self.avg_sales,
            "avgOpen": self.avg_open,
            "avgClose": self.avg_close,
            "duration": self.duration,
            "members": [r.id for r in self.members],
            "color": self.color,
            "icon": self.icon,
        }
