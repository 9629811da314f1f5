import argparse

from ghostnav import config
from ghostnav.debug import DebugFileObserver, NullObserver
from ghostnav.game import Round
from ghostnav.state.direction import dir_name
from ghostnav.state.modes import MODE_LABELS


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Headless ghost navigation run on the default maze")
    parser.add_argument("--seconds", type=float, default=30.0, help="Simulated seconds to run")
    parser.add_argument("--level", type=int, default=1, help="Level (picks the Scatter/Chase timetable)")
    parser.add_argument("--seed", type=int, default=config.default_seed, help="RNG seed for frightened wandering")
    parser.add_argument("--player", type=int, nargs=2, default=(13, 23), metavar=("TX", "TY"),
                        help="Tile the (stationary) player stands on")
    parser.add_argument("--power-at", type=float, default=None, help="Eat a power pellet at this many seconds")
    parser.add_argument("--debug-log", default=None, help="Append mode transitions and stalls to this file")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    cfg = config.GameConfig(seed=args.seed)
    observer = DebugFileObserver(args.debug_log) if args.debug_log else NullObserver()
    rnd = Round(cfg=cfg, level=args.level, observer=observer)

    player = (args.player[0], args.player[1])
    facing = (-1, 0)
    total_ticks = int(args.seconds * cfg.tick_hz)
    powered = False
    for i in range(1, total_ticks + 1):
        if args.power_at is not None and not powered and i * cfg.tick_ms >= args.power_at * 1000.0:
            rnd.power_pellet()
            powered = True
        phase = rnd.tick(cfg.tick_ms, player, facing)
        if i % cfg.tick_hz == 0:
            print(f"t={i // cfg.tick_hz:>3}s phase={phase.value}")
            for g in rnd.ghosts:
                tx, ty = g.current_tile()
                print(f"    {g.name:<8} {MODE_LABELS[g.current_mode()]:<12} ({tx:>2},{ty:>2}) {dir_name(g.direction)}")


if __name__ == "__main__":
    main()
