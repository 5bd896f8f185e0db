from datetime import date

import pytest
from fastmcp import Client

from agent.prompt import CATALOGUE_EXPLORER_PROMPT, get_catalogue_explorer_prompt
from tools import mcp_server


def test_prompt_injects_date():
    prompt = get_catalogue_explorer_prompt(date(2025, 3, 1))
    assert "TODAY'S DATE: 2025-03-01" in prompt


@pytest.mark.asyncio
async def test_prompt_mentions_every_tool():
    async with Client(mcp_server.mcp) as client:
        tools = await client.list_tools()
    assert tools
    for tool in tools:
        assert tool.name in CATALOGUE_EXPLORER_PROMPT


def test_prompt_explains_root_collection_hand_off():
    assert "collection_id=<root_collection_id>" in CATALOGUE_EXPLORER_PROMPT
