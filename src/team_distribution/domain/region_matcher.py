# rotasmart/src/team_distribution/domain/region_matcher.py

from typing import Optional

from common.text_normalizer import normalize_for_match, textos_compativeis
from team_distribution.entities.team_entities import ServiceRegion, Team


def _campo_casa(regiao: str, registro: str) -> bool:
    # campo vazio na região = curinga
    if not regiao:
        return True
    return textos_compativeis(regiao, registro)


def region_matches(region: ServiceRegion, city: Optional[str], neighborhood: Optional[str]) -> bool:
    """
    Cidade e bairro comparados após normalize_for_match:
    igualdade ou contenção em qualquer direção. Bairro vazio na região cobre a cidade toda.
    Campo vazio no registro também casa (a chave "" está contida em qualquer texto):
    registro sem município é coberto por qualquer região.
    """
    return _campo_casa(normalize_for_match(region.city), normalize_for_match(city)) and _campo_casa(
        normalize_for_match(region.neighborhood), normalize_for_match(neighborhood)
    )


def team_covers(team: Team, city: Optional[str], neighborhood: Optional[str]) -> bool:
    """Alguma região da equipe cobre o local? Equipe sem regiões não cobre nada."""
    return any(region_matches(reg, city, neighborhood) for reg in team.regions)
