#rotasmart/src/common/settings.py

import os
from dotenv import load_dotenv

load_dotenv()


# =====================================================
# 🤖 Serviço externo de IA (distribuição / roteiros)
# =====================================================
AI_PARAMS = {
    "api_key": os.getenv("AI_API_KEY", os.getenv("GEMINI_API_KEY", "")),
    "model": os.getenv("AI_MODEL", "gemini-2.5-flash"),
    "base_url": os.getenv(
        "AI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/models"
    ),
    "timeout": int(os.getenv("AI_TIMEOUT", "60")),
}


# =====================================================
# 🩺 Base de saúde das maquininhas (telemetria)
# =====================================================
HEALTH_BASE_PATH = os.getenv("HEALTH_BASE_PATH", "assets/base_saude.xlsx")


# =====================================================
# 🧩 Segmentação (K-Means)
# =====================================================
SEGMENTATION_K = int(os.getenv("SEGMENTATION_K", "4"))
SEGMENTATION_MAX_ITER = int(os.getenv("SEGMENTATION_MAX_ITER", "20"))


# =====================================================
# 👥 Equipes
# =====================================================
DEFAULT_MAX_ACTIVITIES_PER_ROUTE = int(os.getenv("DEFAULT_MAX_ACTIVITIES_PER_ROUTE", "20"))
UNCOVERED_REGIONS_LIMIT = int(os.getenv("UNCOVERED_REGIONS_LIMIT", "50"))


# =====================================================
# 📝 Logs
# =====================================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE")  # opcional: ex. logs/rotasmart.log
