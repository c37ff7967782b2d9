# main.py
import argparse
import asyncio
import json
import logging
import os

from colorama import Fore, Style, init

from restaurant_sim.baselines import RuleBasedProvider
from restaurant_sim.diagnostics import Diagnostics
from restaurant_sim.engine import RestaurantSimulation
from restaurant_sim.generator import PROFILE_DIR, generate_profiles, initial_state_for, list_profiles, load_profile

init(autoreset=True)


def print_day(simulation: RestaurantSimulation):
    outcome = simulation.last_outcome
    state = simulation.get_current_state()
    if outcome is None:
        print(f"{Fore.RED}Day {state.day - 1}: internal error, day skipped{Style.RESET_ALL}")
        return
    print(f"\n{Fore.YELLOW}--- DAY {outcome.day} ({outcome.weekday}) ---{Style.RESET_ALL}")
    print(f"Traffic: {outcome.traffic} | Revenue: ${outcome.day_revenue:.2f} | "
          f"Satisfaction: {state.customer_satisfaction * 100:.1f}%")
    if outcome.waste_cost > 0:
        print(f"{Fore.LIGHTBLACK_EX}Waste written off: ${outcome.waste_cost:.2f}{Style.RESET_ALL}")
    for advisory in state.advisories:
        color = Fore.RED if 'Increase' in advisory.message else Fore.CYAN
        print(f"{color}[{advisory.category}] {advisory.subject}: {advisory.message}{Style.RESET_ALL}")


def run_simulation(profile_id="classic-diner", total_days=7, dynamic=True, verbose=False):
    """Run one profile with rule-based decisions. Returns the diagnostic report."""
    profile = load_profile(profile_id)
    if verbose:
        print(f"{Fore.CYAN}Initializing restaurant profile: {profile['name']}{Style.RESET_ALL}")

    simulation = RestaurantSimulation(initial_state_for(profile, total_days), provider=RuleBasedProvider())
    diagnostics = Diagnostics(profile['id'])

    def on_day(sim):
        diagnostics.record_step(sim.get_current_state(), sim.last_outcome, sim.last_decisions)
        if verbose:
            print_day(sim)

    asyncio.run(simulation.run_full_simulation(fetch_dynamic=dynamic, on_day=on_day))
    report = diagnostics.generate_report()

    if verbose:
        print(f"\n{Fore.GREEN}Simulation Complete.{Style.RESET_ALL}")
        print("\n=== DIAGNOSTIC REPORT ===")
        print(f"Strategy: {report['strategy']}")
        print(f"Total Revenue: ${report['total_revenue']:,.2f}")
        print(f"Net Profit: ${report['net_profit']:,.2f}")
        print(f"Mean Satisfaction: {report['mean_satisfaction'] * 100:.1f}%")
        print(f"Stockout Days: {report['stockout_days']}")
        print("=========================")

    return report


def run_baseline(total_days: int, dynamic: bool):
    print(f"{Fore.MAGENTA}=== STARTING BASELINE RUN ({total_days} days) ==={Style.RESET_ALL}")
    os.makedirs("results", exist_ok=True)

    print(f"{'Profile':<16} | {'Revenue':<12} | {'Net Profit':<12} | {'Satisfaction':<12} | {'Strategy':<14}")
    print("-" * 80)

    generate_profiles(PROFILE_DIR)
    results = {}
    for profile_id in list_profiles():
        profile_file = os.path.join(PROFILE_DIR, f"{profile_id}.json")
        report = run_simulation(profile_file, total_days=total_days, dynamic=dynamic)
        results[profile_id] = report
        color = Fore.GREEN if report['net_profit'] > 0 else Fore.RED
        print(f"{profile_id:<16} | ${report['total_revenue']:<11,.0f} | "
              f"{color}${report['net_profit']:<11,.0f}{Style.RESET_ALL} | "
              f"{report['final_satisfaction'] * 100:<11.1f}% | {report['strategy']:<14}")

    with open("results/baseline.json", "w") as f:
        json.dump(results, f, indent=2)
    print(f"\n{Fore.CYAN}Results saved to results/baseline.json{Style.RESET_ALL}")
    return results


def main():
    parser = argparse.ArgumentParser(description="Run the restaurant simulation with rule-based decisions")
    parser.add_argument("--profile", type=str, default="all", help="Profile id, JSON file, or 'all'")
    parser.add_argument("--days", type=int, default=7, help="Number of days to simulate")
    parser.add_argument("--static", action="store_true", help="Run without any decisions")
    parser.add_argument("--verbose", action="store_true", help="Print daily status and engine logs")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.profile == "all":
        run_baseline(args.days, dynamic=not args.static)
    else:
        run_simulation(args.profile, total_days=args.days, dynamic=not args.static, verbose=True)


if __name__ == "__main__":
    main()
