"""CLI command tests for relmap."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

from relmap.cli.main import app
from relmap.exceptions import ApiRequestError

runner = CliRunner()


@pytest.fixture
def api(monkeypatch: pytest.MonkeyPatch, mock_client: MagicMock) -> MagicMock:
    """Replace the API client built by the CLI with the mocked one."""
    factory = MagicMock(return_value=mock_client)
    monkeypatch.setattr("relmap.cli.context.ApiClient", factory)
    return factory


@pytest.fixture
def relationships_file(tmp_path: Path) -> str:
    """Declaration file with a mirrored customer/order pair."""
    path = tmp_path / "relationships.json"
    path.write_text(
        json.dumps(
            [
                {
                    "sourceEntity": "customer",
                    "targetEntity": "order",
                    "type": "oneToMany",
                    "sourceField": "id",
                    "targetField": "customerId",
                },
                {
                    "sourceEntity": "order",
                    "targetEntity": "customer",
                    "type": "manyToOne",
                    "sourceField": "customerId",
                    "targetField": "id",
                },
            ]
        )
    )
    return str(path)


class TestVersionCommand:
    """Test the version command."""

    def test_version_output(self) -> None:
        """Test that version command shows version info."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "relmap v" in result.stdout


class TestRelationshipsCommands:
    """Test declaration inspection commands."""

    def test_list_json(self) -> None:
        """All declarations are listed in wire form."""
        result = runner.invoke(app, ["--json", "relationships", "list"])
        assert result.exit_code == 0, result.stdout
        data = json.loads(result.stdout)
        assert len(data) == 22
        assert data[0]["sourceEntity"] == "client"
        assert data[0]["targetField"] == "clientId"

    def test_list_for_entity(self) -> None:
        """--entity restricts to declarations naming that type."""
        result = runner.invoke(app, ["--json", "relationships", "list", "--entity", "client"])
        assert result.exit_code == 0
        assert len(json.loads(result.stdout)) == 5

    def test_list_unknown_entity(self) -> None:
        """Unknown types list nothing."""
        result = runner.invoke(app, ["--json", "relationships", "list", "-e", "nonexistent"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == []

    def test_list_table(self) -> None:
        """Terminal mode renders a table."""
        result = runner.invoke(app, ["relationships", "list", "-e", "payment"])
        assert result.exit_code == 0
        assert "invoice" in result.stdout

    def test_entities_json(self) -> None:
        """Entity type names in first-appearance order."""
        result = runner.invoke(app, ["--json", "relationships", "entities"])
        assert result.exit_code == 0
        names = json.loads(result.stdout)
        assert len(names) == 15
        assert names[:3] == ["client", "invoice", "contract"]

    def test_check_json(self) -> None:
        """Built-in table has one-sided declarations and no duplicates."""
        result = runner.invoke(app, ["--json", "relationships", "check"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["declarations"] == 22
        assert len(data["missing_inverses"]) == 10
        assert data["missing_inverses"][0]["relationship"]["targetEntity"] == "payment"
        assert data["duplicates"] == []

    def test_check_strict_fails_on_issues(self) -> None:
        """--strict turns findings into a non-zero exit code."""
        result = runner.invoke(app, ["--json", "relationships", "check", "--strict"])
        assert result.exit_code == 1

    def test_check_consistent_file(self, relationships_file: str) -> None:
        """A fully mirrored file passes the strict check."""
        result = runner.invoke(
            app, ["-r", relationships_file, "relationships", "check", "--strict"]
        )
        assert result.exit_code == 0, result.stdout
        assert "consistent" in result.stdout

    def test_relationships_file_replaces_built_ins(self, relationships_file: str) -> None:
        """Declarations come from the file when one is given."""
        result = runner.invoke(app, ["--json", "-r", relationships_file, "relationships", "list"])
        assert result.exit_code == 0
        assert len(json.loads(result.stdout)) == 2

    def test_relationships_file_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, relationships_file: str
    ) -> None:
        """RELMAP_RELATIONSHIPS_FILE is honoured."""
        monkeypatch.setenv("RELMAP_RELATIONSHIPS_FILE", relationships_file)
        result = runner.invoke(app, ["--json", "relationships", "entities"])
        assert json.loads(result.stdout) == ["customer", "order"]

    def test_missing_relationships_file(self, tmp_path: Path) -> None:
        """Load failures are reported as structured errors."""
        missing = str(tmp_path / "absent.json")
        result = runner.invoke(app, ["--json", "-r", missing, "relationships", "list"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["error"] == "RegistryLoadError"

    def test_context(self) -> None:
        """Context is always JSON and can be filtered."""
        result = runner.invoke(
            app, ["relationships", "context", "--entity", "payment", "--no-guidelines"]
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert len(data["relationships"]) == 1
        assert "guidelines" not in data


class TestRelatedCommands:
    """Test API-backed relationship commands."""

    def test_get(self, api: MagicMock, mock_client: MagicMock) -> None:
        """Related records are fetched through the declared relationship."""
        mock_client.get.return_value = [{"id": 10, "clientId": 1}]

        result = runner.invoke(app, ["--json", "related", "get", "client", "1", "invoice"])

        assert result.exit_code == 0, result.stdout
        assert json.loads(result.stdout) == [{"id": 10, "clientId": 1}]
        mock_client.get.assert_called_once_with("/api/invoices", params={"clientId": "1"})
        mock_client.close.assert_called_once()

    def test_get_keeps_padded_ids(self, api: MagicMock, mock_client: MagicMock) -> None:
        """IDs with leading zeros are sent unchanged."""
        result = runner.invoke(app, ["--json", "related", "get", "invoice", "007", "client"])
        assert result.exit_code == 0, result.stdout
        mock_client.get.assert_called_once_with("/api/clients/007/related/invoice", params={})

    def test_api_url_option(self, api: MagicMock) -> None:
        """--api-url reaches the client settings."""
        runner.invoke(
            app, ["-u", "http://erp.test", "--json", "related", "get", "invoice", "5", "client"]
        )
        settings = api.call_args.args[0]
        assert settings.base_url == "http://erp.test"

    def test_get_undeclared_relationship(self, api: MagicMock, mock_client: MagicMock) -> None:
        """Undeclared pairs exit with a structured error."""
        result = runner.invoke(
            app, ["--json", "related", "get", "expense", "1", "nonexistent-type"]
        )
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["error"] == "RelationshipNotDefinedError"
        assert data["context"]["known_related"] == ["expenseCategory", "project", "user"]
        mock_client.get.assert_not_called()

    def test_update(self, api: MagicMock, mock_client: MagicMock) -> None:
        """Changed source fields are propagated."""
        result = runner.invoke(
            app, ["--json", "related", "update", "invoice", "5", "--set", "clientId=2"]
        )

        assert result.exit_code == 0, result.stdout
        data = json.loads(result.stdout)
        assert data["success"] is True
        assert data["targets"] == ["client"]
        assert data["message"] == "Sent invoice 5 changes through 1 relationship(s)"
        body = mock_client.post.call_args.kwargs["json"]
        assert body["sourceId"] == 5
        assert body["updates"] == {"clientId": 2}

    def test_update_requires_assignments(self, api: MagicMock, mock_client: MagicMock) -> None:
        """At least one --set is needed."""
        result = runner.invoke(app, ["--json", "related", "update", "invoice", "5"])
        assert result.exit_code == 1
        assert "No updates given" in json.loads(result.stdout)["error"]
        mock_client.post.assert_not_called()


class TestIntegrationCommands:
    """Test cross-module commands."""

    def test_data(self, api: MagicMock, mock_client: MagicMock) -> None:
        """Entity data is keyed by module."""
        mock_client.get.side_effect = [{"id": 3}, [], []]

        result = runner.invoke(app, ["--json", "integration", "data", "client", "3"])

        assert result.exit_code == 0, result.stdout
        assert json.loads(result.stdout) == {"clients": {"id": 3}, "invoices": [], "contracts": []}

    def test_update(self, api: MagicMock, mock_client: MagicMock) -> None:
        """Updates fan out and the refresh plan is printed."""
        result = runner.invoke(
            app, ["--json", "integration", "update", "client", "3", "--set", "name=Acme"]
        )

        assert result.exit_code == 0, result.stdout
        assert mock_client.patch.call_count == 2
        plan = json.loads(result.stdout)
        assert "/api/client-management" in plan["queryKeys"]
        assert plan["insightKeys"][0] == "/api/ai-insights"

    def test_data_skips_failed_module(self, api: MagicMock, mock_client: MagicMock) -> None:
        """Without --strict a failing module is left out."""
        mock_client.get.side_effect = [
            {"id": 3},
            ApiRequestError("GET", "/api/invoices/3", 500, "boom"),
            [],
        ]

        result = runner.invoke(app, ["--json", "integration", "data", "client", "3"])

        assert result.exit_code == 0, result.stdout
        assert json.loads(result.stdout) == {"clients": {"id": 3}, "contracts": []}

    def test_data_strict(self, api: MagicMock, mock_client: MagicMock) -> None:
        """--strict turns a module failure into an error exit."""
        mock_client.get.side_effect = ApiRequestError("GET", "/api/clients/3", 500, "boom")

        result = runner.invoke(app, ["--json", "integration", "data", "client", "3", "--strict"])

        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"] == "ApiRequestError"
        assert mock_client.get.call_count == 1

    def test_update_strict(self, api: MagicMock, mock_client: MagicMock) -> None:
        """--strict stops the fan-out at the first failed PATCH."""
        mock_client.patch.side_effect = ApiRequestError("PATCH", "/api/clients/3", 500, "boom")

        result = runner.invoke(
            app,
            ["--json", "integration", "update", "client", "3", "--set", "name=Acme", "--strict"],
        )

        assert result.exit_code == 1
        assert mock_client.patch.call_count == 1

    def test_event(self) -> None:
        """Known events print their refresh plan."""
        result = runner.invoke(app, ["--json", "integration", "event", "contract.signed"])
        assert result.exit_code == 0
        plan = json.loads(result.stdout)
        assert plan["event"] == "contract.signed"
        assert plan["queryKeys"] == [
            "/api/dashboard",
            "/api/invoices",
            "/api/client-management",
            "/api/contracts",
        ]

    def test_unknown_event(self) -> None:
        """Unknown events give an empty plan."""
        result = runner.invoke(app, ["--json", "integration", "event", "invoice.voided"])
        assert result.exit_code == 0
        plan = json.loads(result.stdout)
        assert plan["queryKeys"] == []
        assert plan["insightKeys"] == []
