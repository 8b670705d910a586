# rotasmart/src/team_distribution/infrastructure/ai_service_client.py

# ============================================================
# 📦 src/team_distribution/infrastructure/ai_service_client.py
# ============================================================

import json
from typing import Any, Dict, List, Optional

import requests
from loguru import logger

from common.errors import ExternalServiceError
from common.establishment_entity import EstablishmentRecord
from common.settings import AI_PARAMS
from team_distribution.domain.ai_response_parser import (
    parse_distribution_response,
    parse_route_plan_response,
)
from team_distribution.entities.team_entities import Team


DEFAULT_DISTRIBUTION_RULES = """
1. Geography first: assign each activity to a team whose regions cover its city/neighborhood.
2. Availability: the member must NOT be on vacation (isOnVacation: false).
3. Fixed portfolio: if the activity name is in a member's portfolio, assign it to that member.
4. Balance: spread activities evenly, respecting maxActivitiesPerRoute per member.
""".strip()


# ============================================================
# 🧾 Prompt (payload enxuto de atividades e equipes)
# ============================================================
def _atividades(records: List[EstablishmentRecord]) -> List[Dict[str, Any]]:
    return [
        {
            "id": r.id,
            "name": r.name,
            "address": r.address,
            "neighborhood": r.neighborhood,
            "city": r.municipality,
            "priority": r.priority,
        }
        for r in records
    ]


def _equipes(teams: List[Team]) -> List[Dict[str, Any]]:
    return [
        {
            "id": t.id,
            "name": t.name,
            "maxActivitiesPerRoute": t.max_activities_per_route,
            "regions": [{"city": r.city, "neighborhood": r.neighborhood} for r in t.regions],
            "members": [
                {
                    "id": m.id,
                    "name": m.name,
                    "isOnVacation": m.is_on_vacation,
                    "portfolio": m.portfolio,
                    "transportMode": m.transport_mode,
                    "startLocation": m.preferred_start_location,
                    "schedule": ", ".join(
                        f"{s.day_of_week[:3]}:{s.start_time}-{s.end_time}"
                        for s in m.schedule
                        if not s.is_day_off
                    ),
                }
                for m in t.members
            ],
        }
        for t in teams
    ]


def build_distribution_prompt(
    records: List[EstablishmentRecord],
    teams: List[Team],
    rules: Optional[str] = None,
) -> str:
    regras = rules if rules and rules.strip() else DEFAULT_DISTRIBUTION_RULES

    return (
        "Act as a Logistics Dispatcher AI.\n\n"
        "GOAL: Distribute the following ACTIVITIES among the available TEAMS and assign the best MEMBER.\n\n"
        f"RULES TO FOLLOW:\n{regras}\n\n"
        f"TEAMS & MEMBERS CONFIGURATION:\n{json.dumps(_equipes(teams), ensure_ascii=False, indent=2)}\n\n"
        f"ACTIVITIES TO DISTRIBUTE:\n{json.dumps(_atividades(records), ensure_ascii=False, indent=2)}\n\n"
        "RETURN:\nA pure JSON object where the key is the activity id and the value is "
        '{ "teamId": "...", "memberId": "...", "reason": "short explanation" }'
    )


# ============================================================
# 🤖 Cliente HTTP (generateContent)
# ============================================================
class AIServiceClient:
    """
    Fronteira com o serviço externo de IA.
    Qualquer falha (rede, HTTP, JSON fora do contrato) vira ExternalServiceError.
    Sem retentativa automática.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 base_url: Optional[str] = None, timeout: Optional[int] = None):
        self.api_key = api_key if api_key is not None else AI_PARAMS["api_key"]
        self.model = model or AI_PARAMS["model"]
        self.base_url = (base_url or AI_PARAMS["base_url"]).rstrip("/")
        self.timeout = timeout or AI_PARAMS["timeout"]

    # ------------------------------------------------------------
    def generate_text(self, prompt: str) -> str:
        if not self.api_key:
            raise ExternalServiceError("Chave do serviço de IA não configurada (AI_API_KEY).")

        url = f"{self.base_url}/{self.model}:generateContent"
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        logger.debug(f"[IA][REQ] modelo={self.model} | prompt={len(prompt)} chars")

        try:
            r = requests.post(
                url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"[IA][ERRO] falha de rede: {e}")
            raise ExternalServiceError(f"Falha de comunicação com o serviço de IA: {e}") from e

        if r.status_code != 200:
            logger.error(f"[IA][ERRO] HTTP {r.status_code}: {r.text[:300]}")
            raise ExternalServiceError(f"Serviço de IA respondeu HTTP {r.status_code}.")

        try:
            data = r.json()
            partes = data["candidates"][0]["content"]["parts"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ExternalServiceError("Resposta do serviço de IA fora do formato esperado.") from e

        texto = "".join(p.get("text", "") for p in partes if isinstance(p, dict))
        logger.debug(f"[IA][OK] {len(texto)} chars recebidos")
        return texto

    # ------------------------------------------------------------
    def distribute(
        self,
        records: List[EstablishmentRecord],
        teams: List[Team],
        rules: Optional[str] = None,
    ) -> Dict[str, Dict[str, str]]:
        if not records:
            return {}
        texto = self.generate_text(build_distribution_prompt(records, teams, rules))
        return parse_distribution_response(texto)

    # ------------------------------------------------------------
    def generate_route_plan(self, prompt: str) -> List[Dict[str, Any]]:
        return parse_route_plan_response(self.generate_text(prompt))
