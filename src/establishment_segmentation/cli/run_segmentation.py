#rotasmart/src/establishment_segmentation/cli/run_segmentation.py

# ============================================================
# 📦 src/establishment_segmentation/cli/run_segmentation.py
# ============================================================

import argparse
from loguru import logger

from common.logging_config import setup_logging
from common.records_io import load_records
from common.settings import SEGMENTATION_K, SEGMENTATION_MAX_ITER
from establishment_segmentation.application.segmentation_use_case import executar_segmentacao
from establishment_segmentation.reporting.analytics_summary_service import format_decimal_time
from establishment_segmentation.reporting.export_segmentation_xlsx import exportar_segmentacao


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Segmentação de estabelecimentos por perfil (K-Means determinístico)"
    )
    parser.add_argument("--arquivo", required=True, help="CSV/XLSX/JSON no layout canônico")
    parser.add_argument("--k", type=int, default=SEGMENTATION_K)
    parser.add_argument("--max_iter", type=int, default=SEGMENTATION_MAX_ITER)
    parser.add_argument("--exportar", help="Caminho do xlsx de saída (opcional)")
    parser.add_argument("--log_level", default=None)

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    logger.info("==============================================")
    logger.info("🚀 Iniciando segmentação via CLI")
    logger.info("==============================================")
    logger.info(f"📄 arquivo   = {args.arquivo}")
    logger.info(f"🔢 k         = {args.k}")
    logger.info(f"🔧 max_iter  = {args.max_iter}")

    registros = load_records(args.arquivo)
    resultado = executar_segmentacao(registros, k=args.k, max_iter=args.max_iter)

    print("\n=== PERFIS ===")
    for p in resultado["profiles"]:
        print(
            f"{p.icon} {p.label:<22} | {p.size:>4} estab. | venda média={p.avg_sales:,.2f} | "
            f"{format_decimal_time(p.avg_open)}–{format_decimal_time(p.avg_close)}"
        )

    if args.exportar and resultado["profiles"]:
        exportar_segmentacao(resultado["profiles"], args.exportar)

    return resultado


if __name__ == "__main__":
    main()
