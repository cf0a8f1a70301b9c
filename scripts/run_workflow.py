#!/usr/bin/env python
"""Workflow runner script.

Usage:
    python scripts/run_workflow.py run TYPE ENTITY_ID ACTOR_ID MESSAGE
    python scripts/run_workflow.py resume RUN_ID
    python scripts/run_workflow.py resume-pending
    python scripts/run_workflow.py agents

Examples:
    python scripts/run_workflow.py run order ORD-2024-001 user-1 "Where is my order?"
    python scripts/run_workflow.py run refund INV-2024-001 user-1 "I want a refund"
    python scripts/run_workflow.py run other none user-1 "Hello"
    python scripts/run_workflow.py --checkpoint-dir .checkpoints resume wf-1234
"""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description="Run customer support workflows",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python scripts/run_workflow.py run order ORD-2024-001 user-1 "Where is my order?"
    python scripts/run_workflow.py run support TICKET-1 user-1 "I cannot log in"
    python scripts/run_workflow.py --checkpoint-dir .checkpoints resume-pending
    python scripts/run_workflow.py agents
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )

    parser.add_argument(
        "--env-file",
        type=str,
        default=None,
        help="Path to .env file",
    )

    parser.add_argument(
        "--checkpoint-dir",
        type=str,
        default=None,
        help="Directory for durable workflow checkpoints",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Start a workflow")
    run_parser.add_argument("type", help="order, refund, support or other")
    run_parser.add_argument("entity_id", help="Order, invoice or ticket ID")
    run_parser.add_argument("actor_id", help="Requesting user ID")
    run_parser.add_argument("message", help="User message or issue text")

    resume_parser = subparsers.add_parser("resume", help="Resume a suspended run")
    resume_parser.add_argument("run_id", help="Workflow run ID")

    subparsers.add_parser("resume-pending", help="Resume every unfinished run")
    subparsers.add_parser("agents", help="List agent capabilities")

    return parser


async def execute(args: argparse.Namespace) -> int:
    """Execute the parsed command."""
    from src.core import list_agent_capabilities
    from src.main import create_application, load_config
    from src.utils.exceptions import SupportAgentsError

    if args.command == "agents":
        print(json.dumps(list_agent_capabilities(), indent=2))
        return 0

    if args.checkpoint_dir:
        os.environ["WORKFLOW_CHECKPOINT_DIR"] = args.checkpoint_dir

    config = load_config(config_path=args.config, env_file=args.env_file)

    try:
        engine = create_application(config).engine

        if args.command == "run":
            response = await engine.run(
                args.type, args.entity_id, args.actor_id, args.message
            )
            print(response.model_dump_json(indent=2))
        elif args.command == "resume":
            response = await engine.resume(args.run_id)
            print(response.model_dump_json(indent=2))
        else:
            outcomes = await engine.resume_pending()
            summary = {
                run_id: (
                    {"error": str(outcome)}
                    if isinstance(outcome, Exception)
                    else outcome.model_dump(mode="json")
                )
                for run_id, outcome in outcomes.items()
            }
            print(json.dumps(summary, indent=2))
    except SupportAgentsError as e:
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        return 1
    except Exception as e:
        # Failed workflow steps surface the agent's own error
        error = {"error": type(e).__name__, "message": str(e)}
        print(json.dumps(error, indent=2), file=sys.stderr)
        return 1

    return 0


def main() -> None:
    """Run the CLI."""
    args = build_parser().parse_args()
    sys.exit(asyncio.run(execute(args)))


if __name__ == "__main__":
    main()
