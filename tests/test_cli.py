# -*- coding: utf-8 -*-
"""
Test the autoadmin command line interface.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import json

import click
from click.testing import CliRunner

from autoadmin.conf import AutoAdminSettings
from autoadmin.utils.cli import AutoAdminCLI


class TestAutoAdminCLI:
    cli: click.Group

    @classmethod
    def setup_class(cls) -> None:
        settings = AutoAdminSettings(database_url="sqlite://:memory:")
        cls.cli = AutoAdminCLI(settings=settings).create_cli()

    def setup_method(self) -> None:
        self.runner = CliRunner()

    def test_commands_are_registered(self) -> None:
        assert set(self.cli.commands) == {"seed", "schema", "models"}

    def test_models_are_grouped(self) -> None:
        result = self.runner.invoke(self.cli, ["models"])
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert "Financial" in lines
        tracking = next(line for line in lines if line.strip().startswith("trackings"))
        assert "disabled: create, update, import, bulkOperations" in tracking
        banks = next(line for line in lines if line.strip().startswith("banks"))
        assert "disabled" not in banks

    def test_schema_prints_json(self) -> None:
        result = self.runner.invoke(self.cli, ["schema", "banks"])
        assert result.exit_code == 0, result.output
        schema = json.loads(result.output)
        assert schema["displayName"] == "Bank"
        assert "name" in [field["key"] for field in schema["fields"]]

    def test_schema_of_unknown_model(self) -> None:
        result = self.runner.invoke(self.cli, ["schema", "unknown"])
        assert result.exit_code == 1
        assert "Collection/Model 'unknown' not found" in result.output

    def test_seed_reports_counts(self) -> None:
        result = self.runner.invoke(self.cli, ["seed"])
        assert result.exit_code == 0, result.output
        assert "banks: " in result.output
        assert "cards: " in result.output
        assert "Sample data seeded." in result.output


# The End
