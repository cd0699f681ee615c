"""Background re-matching: RQ queue and worker."""
from pipeline.rematch_queue import (
    RematchQueue,
    get_rematch_queue,
    process_profile_rematch_task,
    process_position_match_task,
)

__all__ = [
    'RematchQueue',
    'get_rematch_queue',
    'process_profile_rematch_task',
    'process_position_match_task',
]
