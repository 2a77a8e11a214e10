import json
from datetime import date
from pathlib import Path
from typing import Dict, List

import pytest
from unittest.mock import MagicMock

from adapters.check_cli import (
    CheckCLI,
    build_check_service,
    resolve_reference_date,
    setup_argument_parser,
)
from application.batch_check_service import BatchCheckService
from domain.models import AmendmentSummary, CheckResult, IndexEntry, ModificationDetail


@pytest.fixture
def input_files(tmp_path: Path) -> Dict[str, str]:
    abbreviations = tmp_path / "abreviaturas.json"
    abbreviations.write_text(
        json.dumps({"CC": {"id": "BOE-A-1889-4763", "nombre": "Código Civil"}}),
        encoding="utf-8",
    )
    articles = tmp_path / "articulos.txt"
    articles.write_text("Art. 51 CC\nArt. 52 CC\nArt. 1 XX\n", encoding="utf-8")
    return {
        "abbreviations": str(abbreviations),
        "articles": str(articles),
        "output_dir": str(tmp_path / "informes"),
    }


@pytest.fixture
def mock_checker() -> MagicMock:
    checker = MagicMock()
    checker.check_article.side_effect = [
        CheckResult.resolved(
            IndexEntry(kind="articulo", label="Artículo 51", id="a51"),
            AmendmentSummary(
                modified=True,
                last_modified_date="2021-06-03",
                details=[ModificationDetail("2021-06-03", "BOE-A-2021-9233", "Ley 8/2021")],
            ),
        ),
        CheckResult.failed("HTTP 503 for http://api"),
    ]
    return checker


def cli_args(files: Dict[str, str], *extra: str) -> List[str]:
    return [
        "--abbreviations",
        files["abbreviations"],
        "--articles",
        files["articles"],
        "--output-dir",
        files["output_dir"],
        *extra,
    ]


class TestCheckCLI:
    """End-to-end tests for the batch check command."""

    @pytest.mark.e2e
    def test_setup_argument_parser_defaults(self) -> None:
        args = setup_argument_parser().parse_args([])

        assert args.abbreviations.endswith("abreviaturas.json")
        assert args.articles.endswith("articulos.txt")
        assert args.output_dir == "informes"
        assert args.reference_date is None
        assert args.retries is None
        assert args.verbose is False

    @pytest.mark.e2e
    def test_successful_run_writes_report(
        self, input_files: Dict[str, str], mock_checker: MagicMock
    ) -> None:
        cli = CheckCLI(service=BatchCheckService(checker=mock_checker))

        exit_code = cli.run(cli_args(input_files, "--date", "01/01/2020"))

        assert exit_code == 0
        reports = list(Path(input_files["output_dir"]).glob("informe_*.md"))
        assert len(reports) == 1
        content = reports[0].read_text(encoding="utf-8")
        assert "**Fecha de referencia:** 01/01/2020" in content
        assert "- **Total de artículos verificados:** 3" in content
        assert "### Art. 51 CC" in content
        assert "  - 2021-06-03: Ley 8/2021 (Ref: BOE-A-2021-9233)" in content
        assert "- Art. 1 XX (Abreviatura no reconocida: XX)" in content
        assert "- Art. 52 CC (BOE-A-1889-4763): HTTP 503 for http://api" in content
        mock_checker.check_article.assert_any_call("BOE-A-1889-4763", "51", date(2020, 1, 1))

    @pytest.mark.e2e
    def test_prompts_for_missing_date(
        self, input_files: Dict[str, str], mock_checker: MagicMock
    ) -> None:
        prompt = MagicMock(return_value="15/02/2019")
        cli = CheckCLI(service=BatchCheckService(checker=mock_checker), prompt=prompt)

        exit_code = cli.run(cli_args(input_files))

        assert exit_code == 0
        prompt.assert_called_once()
        mock_checker.check_article.assert_any_call("BOE-A-1889-4763", "51", date(2019, 2, 15))

    @pytest.mark.e2e
    def test_missing_input_file_fails(self, input_files: Dict[str, str]) -> None:
        service = MagicMock()
        cli = CheckCLI(service=service)
        input_files["articles"] = input_files["articles"] + ".missing"

        exit_code = cli.run(cli_args(input_files, "--date", "01/01/2020"))

        assert exit_code == 1
        service.run.assert_not_called()

    @pytest.mark.e2e
    def test_invalid_abbreviations_fail(self, input_files: Dict[str, str]) -> None:
        Path(input_files["abbreviations"]).write_text("{broken", encoding="utf-8")
        cli = CheckCLI(service=MagicMock())

        assert cli.run(cli_args(input_files, "--date", "01/01/2020")) == 1


class TestResolveReferenceDate:
    @pytest.mark.e2e
    def test_valid_argument(self) -> None:
        prompt = MagicMock()
        assert resolve_reference_date("03/06/2021", prompt=prompt) == date(2021, 6, 3)
        prompt.assert_not_called()

    @pytest.mark.e2e
    def test_invalid_date_falls_back_to_today(self) -> None:
        today = date(2024, 3, 5)
        assert resolve_reference_date("yesterday", today=lambda: today) == today

    @pytest.mark.e2e
    def test_invalid_prompt_answer_falls_back_to_today(self) -> None:
        today = date(2024, 3, 5)
        result = resolve_reference_date(None, prompt=lambda _: "", today=lambda: today)
        assert result == today


class TestBuildCheckService:
    @pytest.mark.e2e
    def test_defaults_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOE_API_TIMEOUT", "12")
        monkeypatch.setenv("BOE_API_MAX_RETRIES", "3")

        service = build_check_service()

        assert service.client.http_client.timeout == 12
        assert service.client.http_client.max_retries == 3

    @pytest.mark.e2e
    def test_arguments_override_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOE_API_MAX_RETRIES", "3")

        service = build_check_service(timeout=5, max_retries=0)

        assert service.client.http_client.timeout == 5
        assert service.client.http_client.max_retries == 0
