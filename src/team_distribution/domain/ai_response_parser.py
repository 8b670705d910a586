# rotasmart/src/team_distribution/domain/ai_response_parser.py

import json
import re
from typing import Any, Dict, List

from common.errors import ExternalServiceError


_OBJ_RE = re.compile(r"\{[\s\S]*\}")
_ARR_RE = re.compile(r"\[[\s\S]*\]")


def _carregar_json(texto: str, contexto: str) -> Any:
    try:
        return json.loads(texto)
    except json.JSONDecodeError as e:
        raise ExternalServiceError(f"Resposta de {contexto} não é JSON válido: {e}") from e


# ============================================================
# 👥 Distribuição: { activityId: {teamId, memberId, reason} }
# ============================================================
def parse_distribution_response(texto: str) -> Dict[str, Dict[str, str]]:
    if not texto or not texto.strip():
        raise ExternalServiceError("Resposta vazia do serviço de distribuição.")

    match = _OBJ_RE.search(texto)
    bruto = _carregar_json(match.group(0) if match else texto, "distribuição")

    if not isinstance(bruto, dict):
        raise ExternalServiceError("Distribuição deve ser um objeto JSON (id → atribuição).")

    saida = {}
    for activity_id, valor in bruto.items():
        if not isinstance(valor, dict) or not valor.get("teamId"):
            raise ExternalServiceError(f"Atribuição inválida para a atividade '{activity_id}'.")
        saida[str(activity_id)] = {
            "teamId": str(valor["teamId"]),
            "memberId": str(valor.get("memberId") or ""),
            "reason": str(valor.get("reason") or ""),
        }
    return saida


# ============================================================
# 🗓️ Roteiro: [ {dayLabel, date, stops: [...]}, ... ]
# ============================================================
def parse_route_plan_response(texto: str) -> List[Dict[str, Any]]:
    if not texto or not texto.strip():
        raise ExternalServiceError("Resposta vazia do serviço de roteirização.")

    ini_lista, ini_obj = texto.find("["), texto.find("{")
    if ini_lista == -1 and ini_obj == -1:
        raise ExternalServiceError("Formato JSON inválido ou vazio na roteirização.")

    # o container que abre primeiro é a raiz
    if ini_lista != -1 and (ini_obj == -1 or ini_lista < ini_obj):
        dados = _carregar_json(_ARR_RE.search(texto).group(0), "roteirização")
    else:
        dados = _carregar_json(_OBJ_RE.search(texto).group(0), "roteirização")
        if not isinstance(dados, list):
            dados = [dados]

    if not isinstance(dados, list) or not all(isinstance(d, dict) for d in dados):
        raise ExternalServiceError("Roteiro deve ser uma lista de dias.")

    for dia in dados:
        if "dayLabel" not in dia or not isinstance(dia.get("stops", []), list):
            raise ExternalServiceError("Dia de roteiro sem 'dayLabel' ou com 'stops' inválido.")

    return dados
