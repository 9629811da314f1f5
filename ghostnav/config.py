from dataclasses import dataclass

from ghostnav.state.modes import Mode


default_seed = 12345


@dataclass
class GameConfig:
    tile_size: int = 16
    tick_hz: int = 60
    base_speed: float = 70.0          # px/sec
    center_tolerance: float = 0.25    # px; "at tile center" window
    perpendicular_snap: float = 1.5   # px; drift correction on the cross axis
    use_bfs: bool = True
    bfs_max_nodes: int = 2048         # exploration cap per decision
    frightened_speed: float = 0.6
    captured_speed: float = 1.6
    wander_radius: int = 7            # frightened targets land within +/- this many tiles
    shy_radius: int = 8               # SHY rule backs off inside this many tiles
    ambush_lead: int = 4
    flank_lead: int = 2
    # pen release
    return_release_delay_ms: int = 1200
    idle_release_ms: int = 4000
    seed: int = default_seed

    @property
    def tick_ms(self) -> float:
        return 1000.0 / self.tick_hz

    def speed_multiplier(self, mode: Mode) -> float:
        if mode is Mode.FRIGHTENED:
            return self.frightened_speed
        if mode is Mode.CAPTURED:
            return self.captured_speed
        return 1.0
