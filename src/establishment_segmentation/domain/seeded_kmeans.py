# ============================================================
# 📦 src/establishment_segmentation/domain/seeded_kmeans.py
# ============================================================

from typing import List

import numpy as np
from loguru import logger

from establishment_segmentation.entities.segmentation_entities import FeatureVector


K_PADRAO = 4
MAX_ITER_PADRAO = 20


# ============================================================
# 🌱 Sementes determinísticas (perfis distintos)
# ============================================================
def select_seeds(features: List[FeatureVector], k: int = K_PADRAO) -> List[int]:
    """
    Escolhe os índices das sementes:
      1. maior venda
      2. menor venda
      3. maior duração (close - open)
      4. abertura mais cedo
    Ordenações estáveis: empates ficam na ordem de entrada.
    Se não houver k sementes distintas, usa os k primeiros registros.
    """
    idx = list(range(len(features)))

    por_vendas = sorted(idx, key=lambda i: -features[i].n_sales)
    por_duracao = sorted(idx, key=lambda i: -(features[i].close - features[i].open))
    por_abertura = sorted(idx, key=lambda i: features[i].open)

    sementes = [por_vendas[0], por_vendas[-1], por_duracao[0], por_abertura[0]][:k]

    if len(set(sementes)) < k:
        logger.debug(f"🌱 Sementes repetidas {sementes} → usando os {k} primeiros registros")
        sementes = idx[:k]

    return sementes


# ============================================================
# 📏 Atribuição ao centróide mais próximo
# ============================================================
def _nearest(points: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    dist = np.sqrt(((points[:, None, :] - centroids[None, :, :]) ** 2).sum(axis=2))
    # argmin devolve o primeiro índice em empate
    return np.argmin(dist, axis=1)


# ============================================================
# 🚀 Lloyd com sementes fixas
# ============================================================
def kmeans_assign(
    features: List[FeatureVector],
    k: int = K_PADRAO,
    max_iter: int = MAX_ITER_PADRAO,
) -> List[int]:
    """
    K-Means determinístico sobre (n_sales, n_open, n_close).
    Retorna o índice do cluster (0..k-1) de cada registro, ou [] se houver menos de k.
    Centróide sem pontos mantém a posição anterior.
    """
    n = len(features)
    if n < k:
        logger.info(f"⚠️ {n} registros < k={k} — clusterização ignorada.")
        return []

    points = np.array([f.as_point() for f in features], dtype=float)
    centroids = points[select_seeds(features, k)].copy()

    assignments = np.zeros(n, dtype=int)
    iteracoes = 0

    while iteracoes < max_iter:
        novos = _nearest(points, centroids)
        mudou = bool(np.any(novos != assignments))
        assignments = novos

        if not mudou:
            break

        for c in range(k):
            membros = points[assignments == c]
            if len(membros):
                centroids[c] = membros.mean(axis=0)

        iteracoes += 1

    tamanhos = np.bincount(assignments, minlength=k)
    logger.info(
        f"🧩 K-Means concluído | k={k} | iterações={iteracoes} | tamanhos={tamanhos.tolist()}"
    )

    return assignments.tolist()
