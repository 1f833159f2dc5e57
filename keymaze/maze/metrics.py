from typing import Any, Dict


def init_metrics() -> Dict[str, Any]:
    return {
        'placement_attempts': 0,
        'placement_fallback': False,
        'blockers_placed': 0,
        'collectibles_placed': 0,
        'open_passages': 0,
        'shortest_path_length': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
