"""
Static lookup tables: GenLayer networks and AI providers.

Both tables are read-only mappings built once at import time.
"""

import json
from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, Optional


@dataclass(frozen=True)
class NetworkDescriptor:
    """A GenLayer network the CLI can target."""

    name: str
    alias: str
    chain_id: int
    rpc_url: str
    sdk_chain: str  # attribute name in genlayer_py.chains

    def to_json(self) -> str:
        return json.dumps(
            {
                "name": self.name,
                "alias": self.alias,
                "chainId": self.chain_id,
                "rpcUrl": self.rpc_url,
            }
        )


NETWORKS = MappingProxyType(
    {
        "localnet": NetworkDescriptor(
            name="Genlayer Localnet",
            alias="localnet",
            chain_id=61999,
            rpc_url="http://localhost:4000/api",
            sdk_chain="localnet",
        ),
        "studionet": NetworkDescriptor(
            name="Genlayer Studio Network",
            alias="studionet",
            chain_id=61999,
            rpc_url="https://studio.genlayer.com/api",
            sdk_chain="studionet",
        ),
        "testnet-asimov": NetworkDescriptor(
            name="Genlayer Asimov Testnet",
            alias="testnet-asimov",
            chain_id=4221,
            rpc_url="https://genlayer-testnet.rpc.caldera.xyz/http",
            sdk_chain="testnet_asimov",
        ),
    }
)

DEFAULT_NETWORK = NETWORKS["localnet"]


def find_network(name: str) -> Optional[NetworkDescriptor]:
    """Look a network up by display name or alias (case-sensitive)."""
    for network in NETWORKS.values():
        if name in (network.name, network.alias):
            return network
    return None


def network_from_config(raw: Optional[str]) -> NetworkDescriptor:
    """Resolve the JSON blob stored under the ``network`` config key.

    Unknown or unreadable values fall back to localnet.
    """
    if not raw:
        return DEFAULT_NETWORK
    try:
        data = json.loads(raw) if isinstance(raw, str) else raw
    except json.JSONDecodeError:
        return DEFAULT_NETWORK
    if not isinstance(data, dict):
        return DEFAULT_NETWORK
    return (
        find_network(data.get("alias", ""))
        or find_network(data.get("name", ""))
        or DEFAULT_NETWORK
    )


@dataclass(frozen=True)
class AiProvider:
    """An LLM provider validators can be created with."""

    name: str
    hint: str
    cli_option_value: str
    env_var: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


AI_PROVIDERS = MappingProxyType(
    {
        "ollama": AiProvider(
            name="Ollama",
            hint="(This will download and run a local instance of Llama 3)",
            cli_option_value="ollama",
        ),
        "openai": AiProvider(
            name="OpenAI",
            hint="(You will need to provide an OpenAI API key)",
            cli_option_value="openai",
            env_var="OPENAIKEY",
        ),
        "heuristai": AiProvider(
            name="Heurist",
            hint="(You will need to provide an API key. Get free API credits at "
            "https://dev-api-form.heurist.ai/ with referral code: "
            '"genlayer")',
            cli_option_value="heuristai",
            env_var="HEURISTAIAPIKEY",
        ),
        "anthropic": AiProvider(
            name="Anthropic",
            hint="(You will need to provide an Anthropic API key)",
            cli_option_value="anthropic",
            env_var="ANTHROPIC_API_KEY",
        ),
        "xai": AiProvider(
            name="xAI",
            hint="(You will need to provide an xAI API key)",
            cli_option_value="xai",
            env_var="XAI_API_KEY",
        ),
        "gemini": AiProvider(
            name="Gemini",
            hint="(You will need to provide a Gemini API key)",
            cli_option_value="gemini",
            env_var="GEMINI_API_KEY",
        ),
    }
)
