"""
Unit tests for the validators command actions.
"""

from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from genlayer_cli.cli import cli
from genlayer_cli.commands.errors import ClientError, UserDeclinedError
from genlayer_cli.commands.validators import ValidatorsAction

PROVIDERS_AND_MODELS = [
    {
        "provider": "openai",
        "model": "gpt-4o",
        "config": {"temperature": 0.75},
        "plugin": "openai-compatible",
        "plugin_config": {"api_key_env_var": "OPENAIKEY"},
        "is_available": True,
        "is_model_available": True,
    },
    {
        "provider": "openai",
        "model": "gpt-4o-mini",
        "config": {},
        "plugin": "openai-compatible",
        "plugin_config": {},
        "is_available": True,
        "is_model_available": False,
    },
    {
        "provider": "ollama",
        "model": "llama3",
        "config": {},
        "plugin": "ollama",
        "plugin_config": {},
        "is_available": False,
        "is_model_available": True,
    },
]


@pytest.fixture
def rpc():
    return MagicMock()


@pytest.fixture
def action(config_store, reporter, rpc):
    return ValidatorsAction(config=config_store, reporter=reporter, rpc=rpc)


class TestGetValidators:
    def test_get_one(self, action, rpc, reporter):
        rpc.call.return_value = {"result": {"address": "0x1"}}

        result = action.get_validator("0x1")

        rpc.call.assert_called_once_with("sim_getValidator", ["0x1"])
        assert result["data"] == {"address": "0x1"}
        reporter.succeed_spinner.assert_called_once_with(
            "Successfully fetched validator with address: 0x1", {"address": "0x1"}
        )

    def test_get_all(self, action, rpc):
        rpc.call.return_value = {"result": []}
        action.get_validator()
        rpc.call.assert_called_once_with("sim_getAllValidators", [])

    def test_rpc_failure(self, action, rpc, reporter):
        rpc.call.side_effect = ClientError("Bad Gateway", status_code=502)
        result = action.get_validator()
        assert result["success"] is False
        assert reporter.fail_spinner.call_args.args[0] == "Error fetching validators"


class TestDeleteValidators:
    @patch("genlayer_cli.commands.actions.Confirm.ask", return_value=True)
    def test_delete_one(self, _ask, action, rpc, reporter):
        rpc.call.return_value = {"result": "0x1"}
        action.delete_validator("0x1")
        rpc.call.assert_called_once_with("sim_deleteValidator", ["0x1"])
        reporter.succeed_spinner.assert_called_once_with("Deleted Address: 0x1")

    @patch("genlayer_cli.commands.actions.Confirm.ask", return_value=True)
    def test_delete_all(self, _ask, action, rpc, reporter):
        rpc.call.return_value = {"result": None}
        action.delete_validator()
        rpc.call.assert_called_once_with("sim_deleteAllValidators", [])
        reporter.succeed_spinner.assert_called_once_with(
            "Successfully deleted all validators"
        )

    @patch("genlayer_cli.commands.actions.Confirm.ask", return_value=False)
    def test_declined_raises_and_sends_nothing(self, _ask, action, rpc):
        with pytest.raises(UserDeclinedError):
            action.delete_validator("0x1")
        rpc.call.assert_not_called()


class TestCountValidators:
    def test_count(self, action, rpc, reporter):
        rpc.call.return_value = {"result": 7}
        assert action.count_validators()["data"] == 7
        reporter.succeed_spinner.assert_called_once_with("Total Validators: 7")


class TestUpdateValidator:
    def test_merges_with_current(self, action, rpc):
        current = {
            "address": "0x1",
            "stake": 3,
            "provider": "openai",
            "model": "gpt-4o",
            "config": {"a": 1},
        }
        rpc.call.side_effect = [{"result": current}, {"result": {"updated": True}}]

        result = action.update_validator("0x1", stake="5", config='{"b": 2}')

        assert result["success"] is True
        rpc.call.assert_called_with(
            "sim_updateValidator", ["0x1", 5, "openai", "gpt-4o", {"b": 2}]
        )

    def test_validator_not_found(self, action, rpc, reporter):
        rpc.call.return_value = {"result": None}
        result = action.update_validator("0x9")
        assert result["success"] is False
        assert rpc.call.call_count == 1

    @pytest.mark.parametrize("payload", ["0x1", ["0x1"], 42])
    def test_non_dict_validator_is_reported(self, action, rpc, reporter, payload):
        rpc.call.return_value = {"result": payload}

        result = action.update_validator("0x1", stake="2")

        assert result["success"] is False
        assert result["error_code"] == "CLIENT_ERROR"
        assert reporter.fail_spinner.call_args.args[0] == "Error updating validator"
        assert rpc.call.call_count == 1

    def test_invalid_stake(self, action, rpc):
        rpc.call.return_value = {"result": {"stake": 1}}
        result = action.update_validator("0x1", stake="-4")
        assert result["error_code"] == "VALIDATION_FAILED"
        assert rpc.call.call_count == 1


class TestCreateRandomValidators:
    def test_relays_parameters(self, action, rpc):
        rpc.call.return_value = {"result": []}
        action.create_random_validators("3", ["openai"], ["gpt-4o"])
        rpc.call.assert_called_once_with(
            "sim_createRandomValidators", [3, 1, 10, ["openai"], ["gpt-4o"]]
        )

    @pytest.mark.parametrize("count", ["0", "-1", "abc"])
    def test_invalid_count(self, action, rpc, count):
        result = action.create_random_validators(count)
        assert result["success"] is False
        rpc.call.assert_not_called()


class TestCreateValidator:
    def test_with_provider_and_model(self, action, rpc):
        rpc.call.side_effect = [
            {"result": PROVIDERS_AND_MODELS},
            {"result": {"address": "0xnew"}},
        ]

        result = action.create_validator(stake="2", provider="openai", model="gpt-4o")

        assert result["data"] == {"address": "0xnew"}
        rpc.call.assert_called_with(
            "sim_createValidator",
            [
                2,
                "openai",
                "gpt-4o",
                {"temperature": 0.75},
                "openai-compatible",
                {"api_key_env_var": "OPENAIKEY"},
            ],
        )

    def test_config_option_overrides_model_config(self, action, rpc):
        rpc.call.side_effect = [{"result": PROVIDERS_AND_MODELS}, {"result": {}}]
        action.create_validator(
            stake="1", config='{"temperature": 0}', provider="openai", model="gpt-4o"
        )
        assert rpc.call.call_args.args[1][3] == {"temperature": 0}

    @patch("genlayer_cli.commands.validators.Prompt.ask")
    def test_prompts_for_provider_and_model(self, mock_ask, action, rpc):
        mock_ask.side_effect = ["openai", "gpt-4o"]
        rpc.call.side_effect = [{"result": PROVIDERS_AND_MODELS}, {"result": {}}]

        action.create_validator(stake="1")

        provider_choices = mock_ask.call_args_list[0].kwargs["choices"]
        model_choices = mock_ask.call_args_list[1].kwargs["choices"]
        assert provider_choices == ["openai"]
        assert model_choices == ["gpt-4o"]

    def test_model_requires_provider(self, action, rpc, reporter):
        result = action.create_validator(stake="1", model="gpt-4o")
        assert result["success"] is False
        rpc.call.assert_not_called()

    def test_invalid_stake(self, action, rpc):
        assert action.create_validator(stake="0")["success"] is False
        rpc.call.assert_not_called()

    def test_unavailable_provider(self, action, rpc):
        rpc.call.return_value = {"result": PROVIDERS_AND_MODELS}
        result = action.create_validator(stake="1", provider="ollama")
        assert result["success"] is False
        assert rpc.call.call_count == 1

    def test_no_providers(self, action, rpc):
        rpc.call.return_value = {"result": []}
        assert action.create_validator(stake="1")["success"] is False


class TestValidatorsCommand:
    def test_create_random_space_separated_lists(self):
        with patch.object(
            ValidatorsAction, "create_random_validators", return_value={"success": True}
        ) as mock_create:
            result = CliRunner().invoke(
                cli,
                [
                    "validators",
                    "create-random",
                    "--providers",
                    "openai",
                    "anthropic",
                    "--models",
                    "gpt-4o",
                    "--count",
                    "3",
                ],
            )

        assert result.exit_code == 0
        mock_create.assert_called_once_with("3", ["openai", "anthropic"], ["gpt-4o"])

    def test_failed_rpc_exits_nonzero(self):
        with patch.object(
            ValidatorsAction, "count_validators", return_value={"success": False}
        ):
            result = CliRunner().invoke(cli, ["validators", "count"])
        assert result.exit_code == 1
