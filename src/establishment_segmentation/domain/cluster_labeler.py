# ============================================================
# 📦 src/establishment_segmentation/domain/cluster_labeler.py
# ============================================================

from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

from common.establishment_entity import EstablishmentRecord
from establishment_segmentation.domain.feature_extractor import (
    open_hour,
    close_hour,
    sales_value,
)
from establishment_segmentation.entities.segmentation_entities import ClusterProfile


# ============================================================
# 🏷️ Taxonomia de perfis
# ============================================================
HIGH_PERFORMANCE = "High Performance"
LOW_PERFORMANCE = "Low Performance"
STANDARD_COMMERCE = "Standard Commerce"
EXTENDED_OPERATION = "Extended Operation"
AVERAGE_PERFORMANCE = "Average Performance"
PREMIUM_MORNING = "Premium Morning"
ALTERNATIVE_PROFILE = "Alternative Profile"

# label → (descrição, cor, ícone)
PERFIS = {
    HIGH_PERFORMANCE: ("Revenue leaders during business hours.", "emerald", "💰"),
    LOW_PERFORMANCE: ("Establishments with the lowest relative revenue.", "orange", "📉"),
    STANDARD_COMMERCE: ("Regular revenue profile.", "gray", "🏢"),
    EXTENDED_OPERATION: ("Stores with long opening hours.", "blue", "🏪"),
    AVERAGE_PERFORMANCE: ("Establishments with a standard operation.", "blue", "⚖️"),
    PREMIUM_MORNING: ("High traffic early in the day.", "indigo", "☕"),
    ALTERNATIVE_PROFILE: ("Differentiated hours or profile.", "purple", "🍸"),
}

# Limiares das renomeações
LOW_VS_HIGH_RATIO = 0.8
EXTENDED_MIN_HOURS = 10.5
MORNING_MAX_OPEN = 8.5


@dataclass
class _ClusterStats:
    idx: int
    avg_sales: float
    avg_open: float
    avg_close: float
    duration: float
    items: List[EstablishmentRecord]


# ============================================================
# 📊 Estatísticas por cluster (valores brutos, não normalizados)
# ============================================================
def _cluster_stats(
    records: List[EstablishmentRecord], assignments: List[int], k: int
) -> List[_ClusterStats]:
    stats = []
    for c in range(k):
        items = [r for r, a in zip(records, assignments) if a == c]
        if not items:
            continue

        n = len(items)
        avg_sales = sum(sales_value(r) for r in items) / n
        avg_open = sum(open_hour(r) for r in items) / n
        avg_close = sum(close_hour(r) for r in items) / n
        duration = avg_close - avg_open
        if duration < 0:
            duration += 24

        stats.append(_ClusterStats(c, avg_sales, avg_open, avg_close, duration, items))
    return stats


def _profile(stat: _ClusterStats, label: str) -> ClusterProfile:
    descricao, cor, icone = PERFIS[label]
    return ClusterProfile(
        cluster_id=stat.idx,
        label=label,
        description=descricao,
        avg_sales=stat.avg_sales,
        avg_open=stat.avg_open,
        avg_close=stat.avg_close,
        duration=stat.duration,
        members=list(stat.items),
        color=cor,
        icon=icone,
    )


# ============================================================
# 🚀 Rotulagem gulosa (ordem de prioridade fixa)
# ============================================================
def build_cluster_profiles(
    records: List[EstablishmentRecord],
    assignments: List[int],
    k: int = 4,
) -> List[ClusterProfile]:
    """
    Atribui rótulos únicos aos clusters, nesta ordem:
      1. maior venda média              → High Performance
      2. menor venda média (restantes)  → Low Performance | Standard Commerce
      3. maior duração (restantes)      → Extended Operation | Average Performance
      4. o que sobrar                   → Premium Morning | Alternative Profile
    Cada escolha retira o cluster do pool. Saída ordenada por venda média desc.
    """
    if not assignments:
        return []

    pool = _cluster_stats(records, assignments, k)
    if not pool:
        return []

    # 1️⃣ Alto desempenho
    pool = sorted(pool, key=lambda s: -s.avg_sales)
    high = pool[0]
    pool = [s for s in pool if s is not high]

    # 2️⃣ Baixo desempenho
    low: Optional[_ClusterStats] = None
    if pool:
        pool = sorted(pool, key=lambda s: s.avg_sales)
        low = pool[0]
        pool = [s for s in pool if s is not low]

    # 3️⃣ Operação estendida
    extended: Optional[_ClusterStats] = None
    if pool:
        pool = sorted(pool, key=lambda s: -s.duration)
        extended = pool[0]
        pool = [s for s in pool if s is not extended]

    # 4️⃣ Manhã
    morning: Optional[_ClusterStats] = pool[0] if pool else None

    perfis = [_profile(high, HIGH_PERFORMANCE)]

    if low is not None:
        parecido_com_high = low.avg_sales > high.avg_sales * LOW_VS_HIGH_RATIO
        perfis.append(_profile(low, STANDARD_COMMERCE if parecido_com_high else LOW_PERFORMANCE))

    if extended is not None:
        longo = extended.duration > EXTENDED_MIN_HOURS
        perfis.append(_profile(extended, EXTENDED_OPERATION if longo else AVERAGE_PERFORMANCE))

    if morning is not None:
        cedo = morning.avg_open < MORNING_MAX_OPEN
        perfis.append(_profile(morning, PREMIUM_MORNING if cedo else ALTERNATIVE_PROFILE))

    perfis.sort(key=lambda p: -p.avg_sales)

    logger.info(
        "🏷️ Perfis: " + " | ".join(f"{p.label}={p.size}" for p in perfis)
    )
    return perfis
