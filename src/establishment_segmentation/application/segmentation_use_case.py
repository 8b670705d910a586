# ============================================================
# 📦 src/establishment_segmentation/application/segmentation_use_case.py
# ============================================================

from typing import List, Dict, Any, Optional

import numpy as np
from loguru import logger
from sklearn.metrics import silhouette_score

from common.errors import InvalidInputError
from common.establishment_entity import EstablishmentRecord
from common.settings import SEGMENTATION_K, SEGMENTATION_MAX_ITER
from establishment_segmentation.domain.feature_extractor import extract_features
from establishment_segmentation.domain.seeded_kmeans import kmeans_assign
from establishment_segmentation.domain.cluster_labeler import build_cluster_profiles
from establishment_segmentation.entities.segmentation_entities import ClusterProfile
from establishment_segmentation.reporting.analytics_summary_service import (
    sales_by_neighborhood,
    sector_distribution,
    best_day_frequency,
)


# ============================================================
# 🧩 Pipeline puro: features → K-Means → rótulos
# ============================================================
def segment_establishments(
    records: List[EstablishmentRecord],
    k: int = SEGMENTATION_K,
    max_iter: int = SEGMENTATION_MAX_ITER,
) -> List[ClusterProfile]:
    if records is None:
        raise InvalidInputError("Lista de estabelecimentos ausente.")

    features = extract_features(records)
    assignments = kmeans_assign(features, k=k, max_iter=max_iter)
    return build_cluster_profiles(records, assignments, k=k)


# ============================================================
# 📐 Diagnóstico (silhouette sobre o espaço normalizado)
# ============================================================
def _silhouette(records: List[EstablishmentRecord], profiles: List[ClusterProfile]) -> Optional[float]:
    if len(profiles) < 2:
        return None

    rotulo_por_id = {}
    for p in profiles:
        for r in p.members:
            rotulo_por_id[id(r)] = p.cluster_id

    features = extract_features(records)
    pontos = np.array([f.as_point() for f in features], dtype=float)
    labels = np.array([rotulo_por_id[id(r)] for r in records])

    if len(set(labels.tolist())) >= len(records):
        return None

    try:
        return float(silhouette_score(pontos, labels))
    except ValueError as e:
        logger.debug(f"📐 Silhouette indisponível: {e}")
        return None


# ============================================================
# 🚀 Execução principal
# ============================================================
def executar_segmentacao(
    records: List[EstablishmentRecord],
    k: int = SEGMENTATION_K,
    max_iter: int = SEGMENTATION_MAX_ITER,
) -> Dict[str, Any]:
    """
    Executa segmentação + painel analítico.
    Retorna perfis, diagnóstico e agregados (bairro, setor, melhor dia).
    """
    logger.info(f"🏁 Iniciando segmentação | registros={len(records) if records else 0} | k={k}")

    profiles = segment_establishments(records, k=k, max_iter=max_iter)
    silhouette = _silhouette(records, profiles)

    if not profiles:
        logger.warning(f"⚠️ Registros insuficientes para k={k} — nenhum perfil gerado.")
    else:
        sil_txt = f"{silhouette:.3f}" if silhouette is not None else "-"
        logger.success(f"✅ Segmentação concluída | perfis={len(profiles)} | silhouette={sil_txt}")

    return {
        "profiles": profiles,
        "silhouette": silhouette,
        "n_records": len(records),
        "sales_by_neighborhood": sales_by_neighborhood(records),
        "sector_distribution": sector_distribution(records),
        "best_day_frequency": best_day_frequency(records),
    }
