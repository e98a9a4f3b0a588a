from typing import Dict

# Keys whose values vary run to run and are excluded from determinism checks.
TIMING_KEYS = ("runtime_ms", "phase_ms")


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'splits': 0,
        'split_failures': 0,
        'regions_final': 0,
        'walls_candidates': 0,
        'walls_discarded': 0,
        'walls_interior': 0,
        'doors_created': 0,
        'rooms_pruned': 0,
        'room_prune_refused': 0,
        'doors_pruned': 0,
        'wall_tiles': 0,
        'floor_tiles': 0,
        'uncovered_cells': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }


def stable_metrics(metrics: Dict) -> Dict:
    return {k: v for k, v in metrics.items() if k not in TIMING_KEYS}
