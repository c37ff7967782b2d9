# run_llm.py
import argparse
import asyncio
import json
import logging
import os

from colorama import Fore, Style, init

from restaurant_sim.cache import CachedSimulation, MemoryStateCache, RedisStateCache
from restaurant_sim.diagnostics import Diagnostics
from restaurant_sim.engine import RestaurantSimulation
from restaurant_sim.generator import initial_state_for, list_profiles, load_profile
from restaurant_sim.llm_wrapper import GeminiDecisionProvider

init(autoreset=True)


async def run_profile(profile_id: str, model_name: str, total_days: int, use_redis: bool, verbose: bool = False):
    print(f"{Fore.CYAN}Running profile {profile_id} with {model_name}{Style.RESET_ALL}")

    profile = load_profile(profile_id)
    simulation = RestaurantSimulation(initial_state_for(profile, total_days),
                                      provider=GeminiDecisionProvider(model_name=model_name))
    cache = RedisStateCache() if use_redis else MemoryStateCache()
    cached = CachedSimulation(simulation, cache, simulation_id=f"{profile['id']}-{model_name}")
    diagnostics = Diagnostics(profile['id'])

    try:
        while not cached.completed:
            day = simulation.get_current_state().day
            try:
                decisions = await simulation.fetch_decisions_for_day(day)
            except Exception as e:
                print(f"{Fore.RED}Error getting decisions for day {day}: {e}{Style.RESET_ALL}")
                decisions = {}

            state = await cached.advance_day(decisions)
            diagnostics.record_step(state, simulation.last_outcome, simulation.last_decisions)

            if verbose:
                sources = ', '.join(f"{k}={v.source}" for k, v in simulation.last_decisions.items())
                print(f"Day {day}: revenue ${state.revenue:,.2f} | "
                      f"satisfaction {state.customer_satisfaction * 100:.1f}% | {sources}")
    finally:
        if use_redis:
            await cache.close()

    report = diagnostics.generate_report()
    print(f"{Fore.GREEN}Profile Complete.{Style.RESET_ALL}")
    print(f"Net Profit: ${report['net_profit']:,.2f}")
    print(f"Strategy: {report['strategy']}")
    print(f"Fallback decisions: {report['metrics']['fallback_decisions']}")
    return report, simulation.decision_log


def main():
    parser = argparse.ArgumentParser(description="Run the restaurant simulation with LLM decisions")
    parser.add_argument("--model", type=str, default="gemini-2.0-flash", help="Model name to use")
    parser.add_argument("--profile", type=str, default="all", help="Profile id or 'all'")
    parser.add_argument("--days", type=int, default=7, help="Number of days to simulate")
    parser.add_argument("--redis", action="store_true", help="Cache daily states in Redis (REDIS_URL)")
    parser.add_argument("--verbose", action="store_true", help="Print daily status")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    profiles = list_profiles() if args.profile == "all" else [args.profile]

    results = {}
    for profile_id in profiles:
        report, decision_log = asyncio.run(
            run_profile(profile_id, args.model, args.days, args.redis, args.verbose))
        results[profile_id] = {
            "report": report,
            "decisions": decision_log,
        }

    os.makedirs("results", exist_ok=True)
    with open("results/llm_eval.json", "w") as f:
        json.dump(results, f, indent=2)

    print("\nResults saved to results/llm_eval.json")


if __name__ == "__main__":
    main()
