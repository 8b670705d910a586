#rotasmart/src/common/text_normalizer.py

import re
import unicodedata


# ============================================================
# 🔤 Utils internos
# ============================================================

def _remover_acentos(s: str) -> str:
    return "".join(
        c for c in unicodedata.normalize("NFD", s)
        if not unicodedata.combining(c)
    )


# ============================================================
# 🧠 CHAVE DE COMPARAÇÃO (carteira / regiões)
# ============================================================
# REGRAS:
# - minúsculas
# - sem acentos
# - só [a-z0-9] (espaços e pontuação somem)
# ============================================================

def normalize_for_match(texto) -> str:
    if not texto:
        return ""

    s = _remover_acentos(str(texto).lower())
    return re.sub(r"[^a-z0-9]", "", s)


# ============================================================
# 🩺 CHAVE DA BASE DE SAÚDE
# ============================================================
# conservadora: só caixa e espaços nas pontas
# ============================================================

def normalize_health_key(texto) -> str:
    if not texto:
        return ""

    return str(texto).strip().lower()


def textos_compativeis(a: str, b: str) -> bool:
    """Igualdade ou contenção em qualquer direção (chaves já normalizadas)."""
    return a in b or b in a
