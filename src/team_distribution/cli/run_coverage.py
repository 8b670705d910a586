#rotasmart/src/team_distribution/cli/run_coverage.py

# ============================================================
# 📦 src/team_distribution/cli/run_coverage.py
# ============================================================

import argparse
import json
from loguru import logger

from common.logging_config import setup_logging
from common.records_io import load_records
from team_distribution.domain.coverage_service import compute_coverage
from team_distribution.domain.portfolio_reconciler import apply_portfolio_rules
from team_distribution.infrastructure.team_config_reader import load_teams


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Carteiras fixas + cobertura/capacidade das equipes"
    )
    parser.add_argument("--arquivo", required=True, help="Registros (CSV/XLSX/JSON)")
    parser.add_argument("--equipes", required=True, help="JSON com as equipes")
    parser.add_argument("--sem_carteira", action="store_true", help="Não aplica carteiras fixas")
    parser.add_argument("--log_level", default=None)

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    logger.info("==============================================")
    logger.info("🚀 Iniciando análise de cobertura via CLI")
    logger.info("==============================================")

    registros = load_records(args.arquivo)
    equipes = load_teams(args.equipes)

    if not args.sem_carteira:
        registros = apply_portfolio_rules(registros, equipes)

    relatorio = compute_coverage(registros, equipes)

    print("\n=== COBERTURA ===")
    print(json.dumps(relatorio.to_dict(), ensure_ascii=False, indent=2))
    return relatorio


if __name__ == "__main__":
    main()
