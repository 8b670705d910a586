# tests/team_distribution/test_run_coverage_cli.py

import json

from team_distribution.cli.run_coverage import main


def _arquivos(tmp_path):
    rotas = tmp_path / "rotas.json"
    rotas.write_text(
        json.dumps(
            [
                {"id": "1", "name": "Padaria Silva", "municipality": "São Paulo", "neighborhood": "Lapa"},
                {"id": "2", "name": "Bar", "municipality": "Campinas", "neighborhood": "Centro"},
            ]
        ),
        encoding="utf-8",
    )

    equipes = tmp_path / "equipes.json"
    equipes.write_text(
        json.dumps(
            [
                {
                    "id": "t1",
                    "name": "Capital",
                    "maxActivitiesPerRoute": 5,
                    "regions": [{"city": "São Paulo", "neighborhood": ""}],
                    "members": [{"id": "m1", "name": "Ana", "portfolio": ["padaria silva"]}],
                }
            ]
        ),
        encoding="utf-8",
    )
    return str(rotas), str(equipes)


def test_cli_aplica_carteira_e_reporta_cobertura(tmp_path, capsys):
    rotas, equipes = _arquivos(tmp_path)

    relatorio = main(["--arquivo", rotas, "--equipes", equipes, "--log_level", "WARNING"])

    assert relatorio.assigned_count == 1
    assert relatorio.remaining_capacity == 4
    assert relatorio.uncovered_regions == ["Centro, Campinas"]
    assert '"capacityHealth": 100' in capsys.readouterr().out


def test_cli_sem_carteira(tmp_path):
    rotas, equipes = _arquivos(tmp_path)

    relatorio = main(["--arquivo", rotas, "--equipes", equipes, "--sem_carteira", "--log_level", "WARNING"])

    assert relatorio.assigned_count == 0
    assert relatorio.pending_count == 2
