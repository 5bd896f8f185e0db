# =============================================================================
# agent/catalogue_agent.py  —  Google ADK agent wired to the XAPIHub tools
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the Google ADK agent used by main.py.  The agent has no XAPIHub
#   logic of its own: it reasons with an LLM (via LiteLlm) and calls the
#   MCP tools served by tools/mcp_server.py.
#
#   ┌──────────────────────┐   stdio / MCP   ┌─────────────────────────┐
#   │  ADK Agent (LiteLlm) │ ──────────────▶ │  tools/mcp_server.py    │
#   └──────────────────────┘                 │  → core/ → XAPIHub API  │
#                                            └─────────────────────────┘
#
# MCP CONNECTION:
#   ADK starts the MCP server as a subprocess with
#   "uv run python -m tools.mcp_server" from the project root, so the
#   subprocess uses the project's virtual environment.  The MCP stdio client
#   only forwards a minimal environment to subprocesses, so the XAPIHub
#   settings are passed through explicitly.
#
# MODEL:
#   Defaults to GPT-4o through OpenRouter (LiteLlm reads OPENROUTER_API_KEY).
#   Override with XAPIHUB_AGENT_MODEL, e.g. "openrouter/openai/gpt-4o-mini".
# =============================================================================

import os

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import CATALOGUE_EXPLORER_PROMPT
from core.config import BASE_URL_ENV, TOKEN_ENV

DEFAULT_MODEL = "openrouter/openai/gpt-4o"
MODEL_ENV = "XAPIHUB_AGENT_MODEL"


def create_agent() -> Agent:
    """Create the XAPIHub catalogue explorer agent.

    Returns:
        A configured Google ADK Agent whose only tools are the XAPIHub MCP
        tools.
    """
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    server_env = dict(os.environ)

    mcp_tools = MCPToolset(
        connection_params=StdioServerParameters(
            command="uv",
            args=["run", "python", "-m", "tools.mcp_server"],
            env=server_env,
            cwd=project_root,
        ),
    )

    return Agent(
        name="xapihub_catalogue_explorer",
        model=LiteLlm(model=os.environ.get(MODEL_ENV, DEFAULT_MODEL)),
        instruction=CATALOGUE_EXPLORER_PROMPT,
        tools=[mcp_tools],
    )


def missing_settings() -> list[str]:
    """Names of required XAPIHub settings that are not set."""
    return [name for name in (BASE_URL_ENV, TOKEN_ENV) if not os.environ.get(name)]
