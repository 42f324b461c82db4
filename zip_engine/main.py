import argparse
import sys
import os
import logging
from datetime import date, datetime

# Ensure project root is in path so we can import 'zip_engine' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

DIFFICULTIES = ["easy", "medium", "hard"]

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected YYYY-MM-DD, got {value!r}") from None

def add_puzzle_args(parser: argparse.ArgumentParser):
    parser.add_argument("--difficulty", "-d", type=str, default=None, choices=DIFFICULTIES,
                        help="Puzzle difficulty (default: easy, or the day's difficulty with --daily)")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed (omit for a practice puzzle)")
    parser.add_argument("--daily", action="store_true", help="Use the daily puzzle")
    parser.add_argument("--date", type=parse_date, default=None, help="Day for --daily (YYYY-MM-DD, default today)")

def resolve_puzzle(args, logger):
    """Returns (puzzle, difficulty, mode) from the shared puzzle options."""
    from zip_engine.core.daily import DailyPuzzle
    from zip_engine.core.difficulty import Difficulty, GameMode
    from zip_engine.algo.generator import PuzzleGenerator

    if args.daily:
        day = args.date or date.today()
        difficulty = Difficulty.from_name(args.difficulty) if args.difficulty else DailyPuzzle.difficulty_for(day)
        seed = DailyPuzzle.seed_for(day)
        logger.info(f"Daily puzzle #{DailyPuzzle.puzzle_number(day)} for {day} ({difficulty.display_name})")
        mode = GameMode.DAILY
    else:
        difficulty = Difficulty.from_name(args.difficulty or "easy")
        seed = args.seed
        mode = GameMode.UNLIMITED

    generator = PuzzleGenerator(difficulty, seed=seed)
    puzzle = generator.generate()
    logger.info(f"Generated {difficulty.display_name} puzzle with seed {generator.seed}")
    if generator.used_fallback:
        logger.info("Hamiltonian search fell back to the snake pattern")
    return puzzle, difficulty, mode

def main():
    parser = argparse.ArgumentParser(description="Zip Engine: daily path-drawing puzzle generator and player")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a puzzle and print it")
    add_puzzle_args(gen_parser)
    gen_parser.add_argument("--solution", action="store_true", help="Also print the solution path")

    # Play Command
    play_parser = subparsers.add_parser("play", help="Play a puzzle in a window")
    add_puzzle_args(play_parser)
    play_parser.add_argument("--record", action="store_true", help="Record gameplay video")
    play_parser.add_argument("--record-events", type=str, help="Save the session log to a binary file")

    # Replay Command
    replay_parser = subparsers.add_parser("replay", help="Replay a session log")
    replay_parser.add_argument("event_file", help="Path to session log file")
    replay_parser.add_argument("--visual", action="store_true", help="Show the replay in a window")
    replay_parser.add_argument("--record", action="store_true", help="Record video")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Measure generation speed and fallback rate")
    bench_parser.add_argument("--sizes", type=int, nargs="+", default=[6, 7, 8, 10, 16, 24], help="Grid sizes")
    bench_parser.add_argument("--runs", type=int, default=200, help="Seeds per size")

    args = parser.parse_args()

    setup_logging(args.verbose)
    logger = logging.getLogger("zip_engine")

    if args.command is None:
        parser.print_help()
        return

    logger.info(f"Running command: {args.command}")

    if args.command == "generate":
        puzzle, difficulty, mode = resolve_puzzle(args, logger)

        from zip_engine.viz.text import render_ascii
        print(render_ascii(puzzle))
        if args.solution:
            print()
            print(render_ascii(puzzle, show_solution=True))

        from zip_engine.algo.walls import WallPlacer
        logger.info(f"Stats: {WallPlacer.calculate_stats(puzzle)}")

    elif args.command == "play":
        puzzle, difficulty, mode = resolve_puzzle(args, logger)

        from zip_engine.core.events import EventWriter
        from zip_engine.core.session import GameSession, format_time

        evt_writer = None
        if args.record_events:
            evt_writer = EventWriter(args.record_events)
            logger.info(f"Recording events to {args.record_events}...")

        session = GameSession(puzzle, difficulty=difficulty, mode=mode, event_writer=evt_writer)
        session.add_completion_listener(
            lambda e: print(f"Solved {e.difficulty.display_name} in {format_time(e.elapsed)}"
                            + (" (daily)" if e.is_daily else ""))
        )

        from zip_engine.viz.renderer import Renderer
        renderer = Renderer(session, record=args.record)
        if args.record:
            if not os.path.exists("recordings"):
                os.makedirs("recordings")
            ts = datetime.now().strftime("%Y%m%d_%H%M%S")
            fname = f"play_{difficulty.name.lower()}_{puzzle.seed}_{ts}.mp4"
            renderer.recorder.output_file = os.path.join("recordings", fname)
            logger.info(f"Recording video to {renderer.recorder.output_file}")

        renderer.init_window()
        renderer.run_loop()

        if evt_writer:
            evt_writer.close()
            print(f"Saved events to {args.record_events}")

    elif args.command == "replay":
        logger.info(f"Replaying {args.event_file}...")
        from zip_engine.core.events import EventReader
        from zip_engine.core.session import format_time
        from zip_engine.viz.replay import SessionReplay

        reader = EventReader(args.event_file)
        replay = SessionReplay(reader)

        if args.visual or args.record:
            from zip_engine.viz.renderer import Renderer
            renderer = Renderer(replay.session, replay=replay, record=args.record)
            renderer.init_window()
            renderer.run_loop()
        else:
            session = replay.run_all()
            state = session.state
            print(f"Events: {replay.event_count}")
            print(f"Path length: {len(session.path)}/{session.puzzle.total_cells}")
            if state.is_completed:
                elapsed = replay.recorded_elapsed if replay.recorded_elapsed is not None else state.elapsed
                print(f"Completed. Recorded time: {format_time(elapsed)}")
            else:
                print(f"Not completed (state: {state.phase.value})")

        reader.close()

    elif args.command == "benchmark":
        import time
        from zip_engine.algo.warnsdorff import WarnsdorffPath
        from zip_engine.core.rng import XorShiftRandom

        print(f"\n{'SIZE':<8} | {'AVG (ms)':<10} | {'FALLBACK':<10} | {'AVG ATTEMPTS':<12}")
        print("-" * 50)

        for size in args.sizes:
            fallbacks = 0
            attempts = 0
            t_start = time.time()
            for seed in range(1, args.runs + 1):
                builder = WarnsdorffPath(size, XorShiftRandom(seed))
                builder.build()
                attempts += builder.attempts
                if builder.used_fallback:
                    fallbacks += 1
            duration = time.time() - t_start

            avg_ms = duration / args.runs * 1000
            rate = fallbacks / args.runs * 100
            print(f"{size:<8} | {avg_ms:<10.3f} | {rate:<9.1f}% | {attempts / args.runs:<12.2f}")

if __name__ == "__main__":
    main()
