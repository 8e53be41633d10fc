"""
Unit tests for the network command.
"""

import json
from unittest.mock import patch

from genlayer_cli.commands.network import NetworkActions
from genlayer_cli.commands.networks import NETWORKS


class TestNetworkActions:
    def test_set_by_alias(self, config_store, reporter):
        result = NetworkActions(config=config_store, reporter=reporter).set_network(
            "testnet-asimov"
        )

        assert result["success"] is True
        stored = json.loads(config_store.get_config_by_key("network"))
        assert stored["alias"] == "testnet-asimov"
        reporter.succeed_spinner.assert_called_once_with(
            f"Network successfully set to {NETWORKS['testnet-asimov'].name}"
        )

    def test_set_by_display_name(self, config_store, reporter):
        name = NETWORKS["studionet"].name
        NetworkActions(config=config_store, reporter=reporter).set_network(name)
        assert json.loads(config_store.get_config_by_key("network"))["name"] == name

    def test_unknown_network(self, config_store, reporter):
        result = NetworkActions(config=config_store, reporter=reporter).set_network(
            "mainnet"
        )
        assert result["success"] is False
        reporter.fail_spinner.assert_called_once_with("Network mainnet not found")
        assert config_store.get_config_by_key("network") is None

    def test_empty_name_is_not_found(self, config_store, reporter):
        result = NetworkActions(config=config_store, reporter=reporter).set_network("")
        assert result["success"] is False

    @patch("genlayer_cli.commands.network.Prompt.ask", return_value="studionet")
    def test_prompts_when_no_name(self, mock_ask, config_store, reporter):
        NetworkActions(config=config_store, reporter=reporter).set_network()

        mock_ask.assert_called_once()
        assert mock_ask.call_args.args[0] == "Select which network do you want to use:"
        assert json.loads(config_store.get_config_by_key("network"))["alias"] == "studionet"
