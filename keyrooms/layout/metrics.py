from typing import Dict


def init_metrics() -> Dict[str, int]:
    return {
        'attempts': 0,
        'failed_advances': 0,
        'no_space_failures': 0,
        'key_holder_failures': 0,
        'backtracks': 0,
        'retries_used': 0,
        'layers_generated': 0,
        'rooms': 0,
        'keys': 0,
        'connections_open': 0,
        'connections_locked': 0,
        'connections_shortcut': 0,
        'runtime_ms': 0,
    }
