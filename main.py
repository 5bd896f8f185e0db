# =============================================================================
# main.py  —  Interactive XAPIHub catalogue explorer
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads .env (XAPIHUB_BASE_URL, XAPIHUB_TOKEN, OPENROUTER_API_KEY)
#   2. Creates the Google ADK agent (agent/catalogue_agent.py), which spawns
#      the MCP tool server (tools/mcp_server.py) as a subprocess
#   3. Reads questions from the terminal ("Which APIs are in the Payments
#      catalogue?") and prints the agent's answers, showing each tool call
#
# If you only want the MCP server (for Cursor or Claude Desktop), run
# `python -m tools.mcp_server` instead.
# =============================================================================

import asyncio
import sys

from dotenv import load_dotenv

# LiteLlm reads OPENROUTER_API_KEY at import/initialisation time.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.catalogue_agent import create_agent, missing_settings

APP_NAME = "xapihub_explorer"
USER_ID = "local_user"


async def run_agent():
    """Run the explorer agent in an interactive terminal loop."""
    missing = missing_settings()
    if missing:
        print(f"❌ Missing required settings: {', '.join(missing)}")
        print("   Set them in the environment or in a .env file.")
        sys.exit(1)

    print("=" * 70)
    print("  XAPIHUB CATALOGUE EXPLORER")
    print("  Powered by Google ADK + FastMCP")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent()

    session_service = InMemorySessionService()
    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )
    session = await session_service.create_session(
        app_name=APP_NAME,
        user_id=USER_ID,
    )

    print("✅ Agent initialized and ready!\n")
    print("💬 Ask about your organizations, projects, catalogues and APIs.")
    print("   (Type 'quit' to exit)\n")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        user_message = types.Content(
            role="user",
            parts=[types.Part(text=user_input)],
        )

        print("\n🤖 Agent is thinking...\n")
        print("-" * 70)

        final_response = ""
        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if getattr(part, "text", None):
                        final_response = part.text
                    if getattr(part, "function_call", None):
                        print(f"  🔧 Calling tool: {part.function_call.name}")

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")

        print("\n" + "=" * 70)


if __name__ == "__main__":
    asyncio.run(run_agent())
