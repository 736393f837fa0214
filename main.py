"""
Pukul Lalat - swat the mosquitoes, catch the child before it falls into the water.

Usage:
    python main.py [--seed <n>] [--headless [--seconds <s>] [--policy <name>]]

Controls:
    A / Left   - Left arm (mosquitoes)
    D / Right  - Right arm (child)
    W / Up     - Arm up (pushes the child up while holding it)
    S / Down   - Arm down
    Esc        - Pause
"""
import argparse

from config import SIM_SEED, HIGHSCORES_PATH
from pukullalat.autoplay import POLICIES, run_simulation


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Pukul Lalat - a handheld-style mosquito swatting game"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=SIM_SEED,
        help=f"Simulation seed (default: {SIM_SEED}, env PL_SIM_SEED)"
    )
    parser.add_argument(
        "--highscores",
        type=str,
        default=HIGHSCORES_PATH,
        help="Where to keep the high score table"
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run one scripted session without a window and print the result"
    )
    parser.add_argument(
        "--seconds",
        type=float,
        default=120.0,
        help="Session length for --headless (default: 120)"
    )
    parser.add_argument(
        "--policy",
        type=str,
        default="keeper",
        choices=sorted(POLICIES),
        help="Scripted player for --headless (default: keeper)"
    )
    return parser.parse_args()


def main():
    """Main entry point."""
    args = parse_args()

    if args.headless:
        summary = run_simulation(seconds=args.seconds, seed=args.seed, policy=args.policy)
        for key, value in summary.to_dict().items():
            print(f"  {key:18} {value}")
        return

    print("=" * 50)
    print("  Pukul Lalat")
    print("=" * 50)
    print()
    print(__doc__.split("Controls:")[1].rstrip())
    print()
    print("Starting game...")

    # Imported late so --headless never initializes pygame.
    from pukullalat.engine import GameEngine

    game = GameEngine(seed=args.seed, highscores_path=args.highscores)
    game.run()

    print("Thanks for playing!")


if __name__ == "__main__":
    main()
