# rotasmart/src/team_distribution/infrastructure/team_config_reader.py

import json
import os
from typing import List

from loguru import logger

from team_distribution.entities.team_entities import Team


def load_teams(path: str) -> List[Team]:
    """Lê o snapshot de equipes (JSON exportado do front) na ordem do arquivo."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Arquivo de equipes não encontrado: {path}")

    with open(path, "r", encoding="utf-8") as f:
        dados = json.load(f)

    if isinstance(dados, dict):
        dados = dados.get("teams", [])

    equipes = [Team.from_dict(t) for t in dados]
    ativas = sum(1 for t in equipes if t.is_active)
    logger.info(f"👥 {len(equipes)} equipes carregadas ({ativas} ativas) de {path}")
    return equipes
