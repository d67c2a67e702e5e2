"""
Swarm Consensus Engine
Main entry point for running a swarm turn from the command line.

Usage:
    python main.py --ask "How should we launch?"            # Run a turn with 4 workers
    python main.py --ask "..." --agents 8 --discussion      # More workers plus a discussion round
    python main.py --ask "..." --mode reasoning --web       # Reasoning models with live web context
    python main.py --estimate --agents 16 --mode reasoning  # Print the runtime estimate only
    python main.py --check-keys                             # Check API key configuration
"""

import argparse
import asyncio
import time
from typing import Optional

from config.config import SWARM_CONFIG, get_model_preset, validate_api_keys
from swarm.budget import estimate_runtime_seconds
from swarm.errors import ConfigurationRejected
from swarm.gateway import CompletionGateway
from swarm.models.schemas import ConversationMessage, SwarmMode, SwarmTurnResult
from swarm.orchestrator import SwarmOrchestrator


def check_api_keys():
    """Check and report API key status."""
    print("\n" + "=" * 60)
    print("API Key Status")
    print("=" * 60)

    status = validate_api_keys()

    for provider, configured in status.items():
        status_str = "[OK] Configured" if configured else "[X] Missing"
        print(f"  {provider.upper()}: {status_str}")

    if not any(status.values()):
        print("\nWarning: No API keys are configured.")
        print("Create a .env file with at least one of:")
        print("  OPENAI_API_KEY=your_key")
        print("  ANTHROPIC_API_KEY=your_key")
        print("  GOOGLE_API_KEY=your_key")
        print("  XAI_API_KEY=your_key")

    return any(status.values())


async def test_api_connections(test_message: str):
    """
    Test API connections by sending a test message to each configured provider.

    Args:
        test_message: Message to send to each provider
    """
    print("\n" + "=" * 60)
    print("API Connection Test")
    print("=" * 60)
    print(f"Test message: \"{test_message}\"")
    print("-" * 60)

    gateway = CompletionGateway.from_config(verbose=False)
    results = {}

    for provider, client in gateway.clients.items():
        print(f"\n  Testing {provider} ({client.model_id})...", end=" ", flush=True)

        try:
            start_time = time.time()
            response = await client.generate(
                messages=[ConversationMessage.user(test_message)],
                max_tokens=100
            )
            elapsed = time.time() - start_time

            print(f"[OK] ({elapsed:.2f}s)")
            print(f"    Response: {response[:100]}{'...' if len(response) > 100 else ''}")
            results[provider] = {"status": "success", "time": elapsed}

        except Exception as e:
            print("[FAIL]")
            print(f"    Error: {str(e)}")
            results[provider] = {"status": "failed", "error": str(e)}

    success_count = sum(1 for r in results.values() if r["status"] == "success")
    print("\n" + "-" * 60)
    print(f"Summary: {success_count}/{len(results)} provider(s) working")

    return results


def print_estimate(agents: int, mode: str, discussion: bool):
    """Print the pre-flight runtime estimate for a configuration."""
    estimate = estimate_runtime_seconds(agents, mode, discussion)
    budget = SWARM_CONFIG.runtime_budget_seconds
    verdict = "within budget" if estimate <= budget else "REJECTED"
    print(f"Estimated runtime: {estimate:.1f}s (budget {budget:g}s) -> {verdict}")


def print_result(result: SwarmTurnResult):
    """Print a turn result summary."""
    by_id = {c.id: c for c in result.candidates}

    print(f"\n{'=' * 60}")
    print(f"# {result.title}")
    print(f"{'=' * 60}\n")
    print(result.final_answer)
    print(f"\nRationale: {result.final_reasoning}")

    print(f"\n{'-' * 60}")
    print("Ranking:")
    for index, entry in enumerate(result.voting_result.ranking, start=1):
        candidate = by_id[entry.candidate_id]
        marker = " (winner)" if entry.candidate_id == result.voting_result.winner_id else ""
        print(f"  {index}. {candidate.worker_name}: {entry.score:g}{marker}")

    if result.web_findings:
        print("\nWeb findings:")
        for finding in result.web_findings:
            print(f"  - {finding.title} ({finding.url})")


async def run_turn(
    question: str,
    agents: int,
    mode: str,
    discussion: bool,
    web: bool,
    save_path: Optional[str] = None
) -> Optional[SwarmTurnResult]:
    """
    Run a single swarm turn and print the outcome.

    Args:
        question: The user's question
        agents: Number of workers
        mode: fast or reasoning
        discussion: Whether to run a discussion round
        web: Whether to fetch live web findings
        save_path: Optional path to save the JSON result

    Returns:
        The turn result, or None if the configuration was rejected
    """
    orchestrator = SwarmOrchestrator(verbose=True)

    try:
        result = await orchestrator.run_turn(
            question,
            worker_count=agents,
            mode=mode,
            discussion_enabled=discussion,
            web_context_enabled=web
        )
    except ConfigurationRejected as e:
        print(f"\n[REJECTED] {e}")
        return None

    print_result(result)

    if save_path:
        orchestrator.save_result(result, save_path)

    return result


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Swarm Consensus Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py --ask "How do we launch in Europe?"
    python main.py --ask "..." --agents 8 --mode reasoning --discussion --web
    python main.py --ask "..." --save results/launch.json
    python main.py --estimate --agents 64 --mode reasoning --discussion
    python main.py --check-keys --test-message "Hello"
        """
    )

    parser.add_argument('--ask', type=str, default=None,
                       help='Question to answer with a swarm turn')
    parser.add_argument('--agents', type=int, default=4,
                       help=f'Number of workers (1-{SWARM_CONFIG.max_workers}, default: 4)')
    parser.add_argument('--mode', choices=[m.value for m in SwarmMode], default=SwarmMode.FAST.value,
                       help='Model tier (default: fast)')
    parser.add_argument('--discussion', action='store_true',
                       help='Run a discussion round before judging')
    parser.add_argument('--web', action='store_true',
                       help='Fetch live web findings for context')
    parser.add_argument('--save', type=str, default=None,
                       help='Save the turn result as JSON to this path')
    parser.add_argument('--estimate', action='store_true',
                       help='Print the runtime estimate and exit')
    parser.add_argument('--check-keys', action='store_true',
                       help='Check API key configuration')
    parser.add_argument('--test-message', type=str, default=None,
                       help='Test message to send to each provider (use with --check-keys)')

    args = parser.parse_args()

    if args.check_keys:
        check_api_keys()
        if args.test_message:
            asyncio.run(test_api_connections(args.test_message))
        return

    if args.estimate:
        print_estimate(args.agents, args.mode, args.discussion)
        return

    if not args.ask:
        parser.print_help()
        return

    if not check_api_keys():
        print("\nPlease configure API keys before running the swarm.")
        return

    preset = get_model_preset(args.mode)
    print(f"\nModels: worker={preset.worker}, judge={preset.judge}, finalizer={preset.finalizer}")

    asyncio.run(run_turn(args.ask, args.agents, args.mode, args.discussion, args.web, args.save))


if __name__ == "__main__":
    main()
