# ============================================================
# 📦 src/establishment_segmentation/reporting/export_segmentation_xlsx.py
# ============================================================

import os
from typing import List

import pandas as pd
from loguru import logger
from openpyxl.styles import Font, Alignment
from openpyxl.utils import get_column_letter

from establishment_segmentation.entities.segmentation_entities import ClusterProfile
from establishment_segmentation.reporting.analytics_summary_service import format_decimal_time


def _df_resumo(profiles: List[ClusterProfile]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Cluster": p.cluster_id,
                "Perfil": p.label,
                "Descrição": p.description,
                "Estabelecimentos": p.size,
                "Venda média": round(p.avg_sales, 2),
                "Abertura média": format_decimal_time(p.avg_open),
                "Fechamento médio": format_decimal_time(p.avg_close),
                "Duração (h)": round(p.duration, 2),
            }
            for p in profiles
        ]
    )


def _df_detalhado(profiles: List[ClusterProfile]) -> pd.DataFrame:
    linhas = []
    for p in profiles:
        for r in p.members:
            linhas.append(
                {
                    "Perfil": p.label,
                    "ID": r.id,
                    "Nome": r.name,
                    "Bairro": r.neighborhood,
                    "Município": r.municipality,
                    "Venda média": r.average_sales,
                    "Abertura": r.open_time,
                    "Fechamento": r.close_time,
                }
            )
    return pd.DataFrame(linhas)


def _formatar_aba(ws, widths):
    ws.freeze_panes = "A2"

    header_font = Font(bold=True)
    header_align = Alignment(horizontal="center", vertical="center")
    for cell in ws[1]:
        cell.font = header_font
        cell.alignment = header_align

    for col_idx, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(col_idx)].width = width


def exportar_segmentacao(profiles: List[ClusterProfile], output_path: str) -> str:
    """Gera xlsx com 2 abas: resumo por perfil e estabelecimentos por perfil."""
    if not profiles:
        raise ValueError("❌ Nenhum perfil para exportar")

    pasta = os.path.dirname(output_path)
    if pasta:
        os.makedirs(pasta, exist_ok=True)

    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        _df_resumo(profiles).to_excel(writer, sheet_name="Resumo por Perfil", index=False)
        _df_detalhado(profiles).to_excel(writer, sheet_name="Estabelecimentos", index=False)

        _formatar_aba(writer.book["Resumo por Perfil"], [10, 22, 44, 16, 14, 16, 18, 12])
        _formatar_aba(writer.book["Estabelecimentos"], [22, 38, 36, 22, 22, 14, 10, 12])

    logger.success(f"✅ Excel de segmentação gerado: {output_path}")
    return output_path
