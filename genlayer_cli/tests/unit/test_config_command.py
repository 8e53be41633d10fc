"""
Unit tests for the config command and ConfigActions.
"""

from click.testing import CliRunner

from genlayer_cli.cli import cli
from genlayer_cli.commands.config import ConfigActions


class TestConfigActions:
    def test_set_then_get_round_trip(self, config_store, reporter):
        actions = ConfigActions(config=config_store, reporter=reporter)

        assert actions.set("defaultOllamaModel=llama3.1")["success"] is True
        result = actions.get("defaultOllamaModel")

        assert result == {"success": True, "data": "llama3.1"}
        reporter.succeed_spinner.assert_called_with(
            "Configuration successfully retrieved", "defaultOllamaModel=llama3.1"
        )

    def test_set_keeps_equals_in_value(self, config_store, reporter):
        ConfigActions(config=config_store, reporter=reporter).set("rpc=http://x/?a=b")
        assert config_store.get_config_by_key("rpc") == "http://x/?a=b"

    def test_set_invalid_format(self, config_store, reporter):
        result = ConfigActions(config=config_store, reporter=reporter).set("novalue")
        assert result["success"] is False
        reporter.fail_spinner.assert_called_once_with("Invalid format. Use 'key=value'.")
        assert config_store.get_config() == {}

    def test_get_missing_key(self, config_store, reporter):
        result = ConfigActions(config=config_store, reporter=reporter).get("missing")
        assert result["success"] is False
        reporter.fail_spinner.assert_called_once_with(
            "No configuration found for 'missing'."
        )

    def test_get_all(self, config_store, reporter):
        config_store.write_config("a", "1")
        result = ConfigActions(config=config_store, reporter=reporter).get()
        assert result["data"] == {"a": "1"}

    def test_reset_existing_key(self, config_store, reporter):
        config_store.write_config("network", "x")
        result = ConfigActions(config=config_store, reporter=reporter).reset("network")
        assert result["success"] is True
        assert config_store.get_config_by_key("network") is None
        reporter.succeed_spinner.assert_called_once_with(
            "Configuration successfully reset"
        )

    def test_reset_absent_key_reports_distinct_failure(self, config_store, reporter):
        config_store.write_config("keep", "me")
        result = ConfigActions(config=config_store, reporter=reporter).reset("missing")

        assert result["success"] is False
        reporter.fail_spinner.assert_called_once_with(
            "Configuration key 'missing' does not exist."
        )
        reporter.succeed_spinner.assert_not_called()
        assert config_store.get_config() == {"keep": "me"}


class TestConfigCommand:
    def test_set_and_get_through_cli(self):
        runner = CliRunner()

        set_result = runner.invoke(cli, ["config", "set", "network=studionet"])
        get_result = runner.invoke(cli, ["config", "get", "network"])

        assert set_result.exit_code == 0
        assert "Configuration successfully updated" in set_result.output
        assert get_result.exit_code == 0
        assert "network=studionet" in get_result.output

    def test_reset_missing_through_cli(self):
        result = CliRunner().invoke(cli, ["config", "reset", "nothing"])
        assert result.exit_code == 1
        assert "does not exist" in result.output
